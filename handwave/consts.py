# ==================== CONFIGURATION ====================
# Adjust these values to tune detection sensitivity

# Wave Detection
FRAME_HISTORY = 10                  # Frames of average color kept in the sliding window
MOVEMENT_THRESHOLD = 0.1            # Min summed color change across the window to count as motion
WAVE_FRAMES = 3                     # Consecutive moving frames needed to confirm a wave
WAVE_COOLDOWN = 0.0                 # Seconds between wave detections (0 disables)

# Wave Animation
WAVE_ANIMATION_NAME = "waving_arm"  # Animation played on the host model when a wave is detected
WAVE_ANIMATION_DURATION = 3.0       # Seconds the animation plays for

# Frame Source
CAMERA_INDEX = 0                    # Default camera device
FRAME_TICK_INTERVAL = 0.001         # Seconds to yield between polls of the frame source

# Animation Relay
WEBSOCKET_HOST = "127.0.0.1"          # Loopback only; "0.0.0.0" to accept other machines
WEBSOCKET_PORT = 3000

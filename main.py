#!/usr/bin/env python3
"""
Hand wave detection from a camera feed.
Plays the "waving_arm" animation whenever someone waves at the camera.
"""

import asyncio
import logging
import sys
import time

import cv2

from handwave.animation import LogAnimationSink, WebSocketAnimationSink
from handwave.consts import CAMERA_INDEX, WEBSOCKET_PORT
from handwave.detectors import WaveDetector
from handwave.exc import MissingCollaborator
from handwave.overlay import annotate
from handwave.runner import HandWaveRunner
from handwave.sources import CameraFrameSource

WINDOW_NAME = "Hand Wave Detection"


def parse_args(argv):
    """
    Parse simple command-line args.

    Returns:
        dict with source, show_window, debug and serve_port (None unless --serve)
    """
    options = {
        "source": CAMERA_INDEX,
        "show_window": "--show" in argv,
        "debug": "--debug" in argv,
        "serve_port": None,
    }

    if argv and not argv[0].startswith("--"):
        # First arg is either camera index or video file path
        try:
            options["source"] = int(argv[0])
        except ValueError:
            options["source"] = argv[0]

    if "--serve" in argv:
        serve_idx = argv.index("--serve")
        options["serve_port"] = WEBSOCKET_PORT
        if serve_idx + 1 < len(argv) and argv[serve_idx + 1].isdigit():
            options["serve_port"] = int(argv[serve_idx + 1])

    return options


async def _run(runner, sink):
    if not isinstance(sink, WebSocketAnimationSink):
        await runner.run()
        return

    # A busy port fails here, before any frame is analysed
    await sink.start()
    try:
        await runner.run()
    finally:
        await sink.close()


def print_summary(runner, start_time):
    print("\n" + "=" * 50)
    print("Detection Summary")
    print("=" * 50)
    print(f"Total runtime: {time.time() - start_time:.1f}s")
    print(f"Total frames: {runner.frame_count}")
    print(f"Skipped frames: {runner.skipped_frames}")
    print(f"Waves detected: {len(runner.events)}")


def main(argv=None):
    """Main entry point."""
    if argv is None:
        argv = sys.argv[1:]
    options = parse_args(argv)
    source = options["source"]

    logging.basicConfig(
        level=logging.DEBUG if options["debug"] else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if not argv:
        print("Usage:")
        print(f"  {sys.argv[0]}                      # Use camera 0")
        print(f"  {sys.argv[0]} 1                    # Use camera 1")
        print(f"  {sys.argv[0]} video.mp4            # Use video file")
        print(f"  {sys.argv[0]} 0 --show             # Show annotated preview")
        print(f"  {sys.argv[0]} 0 --serve 3000       # Send animations to WebSocket clients")
        print(f"  {sys.argv[0]} 0 --debug            # Log every frame's score")
        print()
        print("Running with default camera 0...")
        print()

    print("=" * 50)
    print("Starting hand wave detection...")
    print("=" * 50)

    camera = CameraFrameSource(source)
    detector = WaveDetector()
    if options["serve_port"] is not None:
        sink = WebSocketAnimationSink(port=options["serve_port"])
    else:
        sink = LogAnimationSink()

    runner = HandWaveRunner(camera, sink, detector)

    if options["show_window"]:
        def show_frame(frame, event):
            image = annotate(cv2.cvtColor(frame, cv2.COLOR_RGB2BGR), detector, event)
            cv2.imshow(WINDOW_NAME, image)
            if cv2.waitKey(1) & 0xFF == ord("q"):
                runner.stop()
        runner.frame_callback = show_frame

    runner.attach()
    try:
        camera.start()
    except MissingCollaborator as e:
        print(f"ERROR: {e}")
        print("\nTroubleshooting:")
        if camera.is_video_file:
            print("  - Check if the file exists")
            print("  - Check if the file format is supported (mp4, avi, mov, etc.)")
        else:
            print("  - Check if camera is connected")
            print("  - Try a different camera index (0, 1, 2, etc.)")
            print("  - On Mac, grant camera permissions in System Preferences")
        return 1

    print(f"✓ Frame size: {camera.frame_size[0]}x{camera.frame_size[1]}")
    print(f"✓ Window: {detector.frame_history} frames, threshold {detector.movement_threshold}, "
          f"{detector.wave_frames} moving frames to confirm")
    print("\nProcessing frames... Press Ctrl+C to stop\n")

    exit_code = 0
    start_time = time.time()
    try:
        asyncio.run(_run(runner, sink))
    except KeyboardInterrupt:
        print("\n\nStopping...")
    except OSError as e:
        print(f"ERROR: Could not start WebSocket server on port {options['serve_port']}: {e}")
        print("\nTroubleshooting:")
        print("  - Check if another program is using the port")
        print("  - Try a different port: --serve 3001")
        exit_code = 1
    finally:
        camera.release()
        if options["show_window"]:
            cv2.destroyAllWindows()
        print_summary(runner, start_time)

    return exit_code


if __name__ == "__main__":
    sys.exit(main())

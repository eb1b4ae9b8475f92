"""
NeuroDesk - Hand Gesture Desk Control

Entry point for the application.
"""
import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="NeuroDesk - Hand Gesture Desk Control",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--camera",
        type=int,
        default=None,
        help="Camera device index (overrides config)",
    )

    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the landmark preview under the tile board",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Run the OpenCV debug window instead of the desk UI",
    )

    parser.add_argument(
        "--replay",
        type=Path,
        default=None,
        help="Replay a recorded landmark session (YAML) and print the events",
    )

    return parser.parse_args(argv)


def run_replay(config, path: Path):
    """Feed a recorded session through the engine and print every event."""
    from gestures import GestureEngine
    from gestures.source import load_replay, run_replay as replay_frames
    from ui.tiles import TileBoard

    board = TileBoard(config.surface)
    engine = GestureEngine(board, config.gestures)
    source = load_replay(path)

    print(f"Replaying {len(source)} frames from {path}")
    for output in replay_frames(engine, source):
        board.apply(output.events)
        board.set_view(output.zoom_level, *output.scroll_offset)
        for event in output.events:
            print(f"[{source.timestamp:9.1f} ms] {output.mode.value:<7} {event}")

    print("-" * 40)
    print(f"Tile order: {', '.join(board.tile_ids)}")
    print(f"Selected:   {board.active_tile}")
    print(f"Zoom:       {engine.state.zoom_level:.2f}")
    print(f"Scroll:     ({engine.state.scroll_x:.0f}, {engine.state.scroll_y:.0f}) px")
    return 0


def run_webcam_debug(config):
    """
    Run webcam in debug mode - shows camera feed with landmarks and engine readout.
    """
    import cv2
    from gestures import GestureEngine
    from ui.tiles import TileBoard
    from webcam import HandTracker

    tracker = HandTracker(config)
    board = TileBoard(config.surface)
    engine = GestureEngine(board, config.gestures)

    print("Starting webcam debug mode...")
    print("Press 'q' to quit")
    print("-" * 40)

    if not tracker.start():
        print(f"ERROR: {tracker.status}")
        return 1

    try:
        while True:
            landmarks = tracker.next_frame()
            output = engine.step(landmarks, tracker.timestamp)
            board.apply(output.events)
            board.set_view(output.zoom_level, *output.scroll_offset)

            frame = tracker.get_frame_with_landmarks(landmarks)
            if frame is not None:
                cv2.putText(
                    frame, f"Gesture: {output.mode.value.upper()}", (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 1, (0, 255, 0), 2
                )
                info_lines = [
                    f"Pinch: {output.pinch_strength:.2f}  Speed: {output.speed:.2f}",
                    f"Zoom: {output.zoom_level:.2f}  Scroll: ({output.scroll_offset[0]:.0f}, {output.scroll_offset[1]:.0f})",
                    f"Dwell: {output.dwell_progress:.2f}  Selected: {board.active_tile}",
                ]
                for i, line in enumerate(info_lines):
                    cv2.putText(
                        frame, line, (10, 60 + i * 25),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1
                    )

                for event in output.events:
                    print(f"[{tracker.frame_count:5d}] {event}")

                cv2.imshow("NeuroDesk Debug", frame)

            if cv2.waitKey(1) & 0xFF == ord('q'):
                break

    finally:
        tracker.stop()
        cv2.destroyAllWindows()

    return 0


def run_desk_mode(config):
    """Run the desk UI with the engine on a background thread."""
    import signal
    import atexit
    from PyQt5.QtWidgets import QApplication
    from PyQt5.QtCore import QThread, Qt
    from ui.tiles import TileBoard
    from ui.desk_window import DeskWindow
    from webcam import EngineWorker

    app = QApplication(sys.argv)

    board = TileBoard(config.surface)
    window = DeskWindow(board)
    window.show()

    thread = QThread()
    worker = EngineWorker(config, board)
    worker.moveToThread(thread)

    def cleanup():
        """Stop the frame loop and wait for the camera to be released."""
        print("\nCleaning up camera resources...")
        worker.stop_process()
        thread.quit()
        thread.wait(2000)
        print("Cleanup complete.")

    atexit.register(cleanup)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        print(f"\nReceived signal {signum}, shutting down...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    def handle_error(msg):
        print(f"WORKER ERROR: {msg}")
        window.show_error(msg)

    # Use QueuedConnection so UI updates happen in the main thread
    thread.started.connect(worker.start_process)
    worker.frame_processed.connect(window.update_frame, Qt.QueuedConnection)
    worker.frame_ready.connect(window.set_webcam_frame, Qt.QueuedConnection)
    worker.hand_lost.connect(lambda: print("Hand lost, gesture state reset"), Qt.QueuedConnection)
    worker.error.connect(handle_error, Qt.QueuedConnection)

    thread.start()

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)  # Avoid double cleanup

    return result


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    from gestures import load_config
    config = load_config(args.config)

    if args.camera is not None:
        config.camera.device_id = args.camera
    if args.preview:
        config.ui.show_preview = True
    if args.debug:
        config.ui.debug_overlay = True

    print("NeuroDesk starting...")
    print(f"  Camera: {config.camera.device_id} ({config.camera.width}x{config.camera.height})")
    print(f"  Surface: {config.surface.width}x{config.surface.height}")
    print(f"  Debug: {config.ui.debug_overlay}")
    print()

    if args.replay is not None:
        return run_replay(config, args.replay)
    if config.ui.debug_overlay:
        return run_webcam_debug(config)
    return run_desk_mode(config)


if __name__ == "__main__":
    sys.exit(main())

"""
Typehunt CLI - Command-line interface for the challenge.

Usage:
    typehunt classes                       List the vocabulary
    typehunt play [--words a,b]            Play list mode in the terminal
    typehunt play --demo-objects cup,book  Play camera mode against a fake detector
    typehunt serve [--host H --port P]     Run the HTTP/WebSocket API
"""

import argparse
import asyncio
import logging
import sys

from .session.presenter import Presenter


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Typehunt - Timed word-typing challenge",
        prog="typehunt",
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Classes command
    subparsers.add_parser("classes", help="List the vocabulary with display names")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--words", help="Comma separated word list (default: COCO classes)")
    play_parser.add_argument("--duration", type=int, default=None, help="Session length in seconds")
    play_parser.add_argument("--cycle", action="store_true", help="Re-offer words once all are cleared")
    play_parser.add_argument(
        "--demo-objects",
        help="Comma separated labels a fake detector keeps seeing (camera mode)",
    )
    play_parser.add_argument("--seed", type=int, default=None, help="Random seed")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP/WebSocket API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "classes":
        cmd_classes(args)
    elif args.command == "play":
        cmd_play(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_classes(args):
    """Print the built-in vocabulary."""
    from .words import LabelTranslator

    translator = LabelTranslator()
    for label, display in translator.entries():
        print(f"{label}: {display}")


def cmd_play(args):
    """Play one session in the terminal."""
    from .config import GameConfig

    overrides = {"cycle_vocabulary": args.cycle, "random_seed": args.seed}
    if args.words:
        overrides["vocabulary"] = _split(args.words)
    if args.duration is not None:
        overrides["session_duration"] = args.duration

    try:
        config = GameConfig.from_env(**overrides)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    demo_objects = _split(args.demo_objects) if args.demo_objects else None
    score = asyncio.run(_play(config, demo_objects))
    print(f"\nFinal score: {score}")


def cmd_serve(args):
    """Run the API with uvicorn."""
    import uvicorn
    from .api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)


async def _play(config, demo_objects):
    from .session import GameController, GameMode, GameStatus
    from .vision import MockObjectDetector, StaticFrameSource

    frame_source = detector = None
    mode = GameMode.LIST
    if demo_objects:
        mode = GameMode.CAMERA
        frame_source = StaticFrameSource()
        detector = MockObjectDetector([
            [{"label": label, "confidence": 0.9, "bbox": (0, 0, 10, 10)} for label in demo_objects]
        ])

    presenter = TerminalPresenter()
    controller = GameController(
        config,
        frame_source=frame_source,
        detector=detector,
        presenter=presenter,
    )

    result = controller.start(mode)
    if not result.success:
        print(f"Error: {result.message}")
        return 0

    print("Type each target and press Enter. Ctrl-D quits.")
    loop = asyncio.get_running_loop()
    while controller.status == GameStatus.RUNNING:
        reader = loop.run_in_executor(None, sys.stdin.readline)
        ended = loop.create_task(_wait_until_ended(controller))
        done, _pending = await asyncio.wait(
            {reader, ended}, return_when=asyncio.FIRST_COMPLETED
        )
        ended.cancel()
        if reader not in done:
            break
        line = reader.result()
        if not line:
            controller.stop()
            break
        controller.handle_input(line.rstrip("\n"))

    return controller.session.score


async def _wait_until_ended(controller, poll: float = 0.1):
    from .session import GameStatus

    while controller.status == GameStatus.RUNNING:
        await asyncio.sleep(poll)


def _split(value):
    return [item.strip() for item in value.split(",") if item.strip()]


class TerminalPresenter(Presenter):
    """
    Prints target and feedback changes; ignores frames.
    """

    def __init__(self, stream=None):
        self.stream = stream or sys.stdout
        self._last = None

    def render(self, commands):
        pass

    def update(self, snapshot):
        shown = (snapshot.target_word, snapshot.feedback, snapshot.status_message)
        if shown == self._last:
            return
        self._last = shown
        target = snapshot.target_word
        if snapshot.target_display and snapshot.target_display != target:
            target = f"{target} ({snapshot.target_display})"
        print(
            f"[{snapshot.remaining_seconds:>3}s | score {snapshot.score}] "
            f"target: {target}  {snapshot.feedback}  {snapshot.status_message}",
            file=self.stream,
        )

    def session_ended(self, score, reason):
        print(
            f"Game over ({reason.value})! Score: {score}. Press Enter to exit.",
            file=self.stream,
        )


if __name__ == "__main__":
    main()

"""Entry point for `python -m pianotiles` or the `pianotiles` console script."""

import argparse
import logging
import sys

from pianotiles.catalog import NoteCatalog
from pianotiles.config import DIFFICULTY_OPTIONS
from pianotiles.melody_loader import MelodyLoadError, load_melody
from pianotiles.settings import load_settings, save_settings


def _init_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def main() -> None:
    parser = argparse.ArgumentParser(description="Piano Tiles — falling-tile rhythm game")
    parser.add_argument(
        "--difficulty",
        choices=[label.lower() for label, _ in DIFFICULTY_OPTIONS],
        help="How long tiles take to fall (easy = 3 beats, hard = 1)",
    )
    parser.add_argument("--bpm", type=float, help="Tempo in beats per minute")
    parser.add_argument("--melody", default="", help="MIDI file to play instead of the built-in tune")
    parser.add_argument("--sample-url", help="Base URL of the piano sample host")
    parser.add_argument("--no-audio", action="store_true", help="Run without sound")
    parser.add_argument("--save-settings", action="store_true", help="Remember these options")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    _init_logging(args.verbose)

    settings = load_settings()
    if args.difficulty:
        settings.difficulty = args.difficulty.capitalize()
    if args.bpm:
        settings.bpm = args.bpm
    if args.sample_url:
        settings.sample_base_url = args.sample_url
    if args.save_settings:
        save_settings(settings)

    melody = None
    if args.melody:
        try:
            melody = load_melody(args.melody, midi_range=NoteCatalog().midi_range)
        except MelodyLoadError as exc:
            logging.getLogger(__name__).error("%s", exc)
            sys.exit(1)

    # pygame is imported here so --help works without a display
    from pianotiles.app import App

    App(settings=settings, melody=melody, audio_enabled=not args.no_audio).run()


if __name__ == "__main__":
    main()

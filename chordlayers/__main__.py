"""Command-line entry point.

Usage:
    python -m chordlayers progressions [GENRE]
    python -m chordlayers export CONFIG [--out DIR]
    python -m chordlayers play CONFIG [--device NAME]

Options:
    --verbose, -v       Log debug messages (fallback chords, unknown notes)
"""

import argparse
import asyncio
import logging
import signal
import sys
import typing

import chordlayers.chords
import chordlayers.config
import chordlayers.export
import chordlayers.midi_utils
import chordlayers.player
import chordlayers.session
import chordlayers.voices


logger = logging.getLogger(__name__)


def _list_progressions (genre: typing.Optional[str]) -> int:

	"""Print the progression catalog, optionally for a single genre."""

	genres = [genre] if genre else chordlayers.chords.GENRES

	for name in genres:

		try:
			progressions = chordlayers.chords.progressions_for(name)
		except KeyError as e:
			logger.error(e.args[0])
			return 1

		print(f"{name}:")
		for progression in progressions:
			print(f"  {progression.name:<14} {' '.join(progression.chords):<22} {progression.theory}")

	return 0


def _export (config_path: str, out: typing.Optional[str]) -> int:

	"""Export a configured session as MIDI files."""

	config = chordlayers.config.load_config(config_path)
	session = chordlayers.config.session_from_config(config)
	files = chordlayers.export.export_session(session)

	if not files:
		logger.warning("Nothing to export: no progression and no non-empty layers.")
		return 0

	chordlayers.export.write_files(files, out or chordlayers.config.output_dir(config))

	return 0


async def run_until_stopped (
	player: chordlayers.player.Player,
	session: chordlayers.session.Session,
	stop_event: typing.Optional[asyncio.Event] = None
) -> None:

	"""
	Play a session until *stop_event* is set, or until SIGINT/SIGTERM when no event is given.
	"""

	logger.info("Playing session. Press Ctrl+C to stop.")

	await player.play(session)

	if stop_event is None:
		stop_event = asyncio.Event()
		loop = asyncio.get_running_loop()

		for sig in (signal.SIGINT, signal.SIGTERM):
			loop.add_signal_handler(sig, stop_event.set)

	try:
		await stop_event.wait()
	finally:
		await player.stop()
		player.dispose()


def _play (config_path: str, device: typing.Optional[str]) -> int:

	"""Play a configured session on a MIDI output device."""

	config = chordlayers.config.load_config(config_path)
	session = chordlayers.config.session_from_config(config)

	device_name, midi_out = chordlayers.midi_utils.select_output_device(device or chordlayers.config.midi_device(config))

	if midi_out is None:
		return 1

	player = chordlayers.player.Player(chordlayers.voices.MidiVoiceSet.factory(midi_out), genre=session.genre)

	try:
		asyncio.run(run_until_stopped(player, session))
	except KeyboardInterrupt:
		pass
	finally:
		midi_out.close()
		logger.info(f"Closed MIDI output: {device_name}")

	return 0


def _build_parser () -> argparse.ArgumentParser:

	"""Build the argument parser."""

	parser = argparse.ArgumentParser(prog="chordlayers", description="Chord progressions and pattern layers to MIDI.")
	parser.add_argument("--verbose", "-v", action="store_true", help="Log debug messages")

	commands = parser.add_subparsers(dest="command", required=True)

	listing = commands.add_parser("progressions", help="List the progression catalog")
	listing.add_argument("genre", nargs="?", default=None, help="Only list this genre")

	export = commands.add_parser("export", help="Write MIDI files for a session")
	export.add_argument("config", help="Session YAML file")
	export.add_argument("--out", default=None, help="Output directory (overrides output_dir)")

	play = commands.add_parser("play", help="Play a session on a MIDI output device")
	play.add_argument("config", help="Session YAML file")
	play.add_argument("--device", default=None, help="MIDI output device name")

	return parser


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Main entry point for the chordlayers command line.
	"""

	args = _build_parser().parse_args(argv)

	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

	try:
		if args.command == "progressions":
			return _list_progressions(args.genre)

		if args.command == "export":
			return _export(args.config, args.out)

		return _play(args.config, args.device)

	except ValueError as e:
		logger.error(str(e))
		return 1


if __name__ == "__main__":
	sys.exit(main())

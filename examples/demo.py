"""
Build a session in code, export it, then play it live.

Run: python examples/demo.py
Press Ctrl+C to stop playback.
"""

import asyncio
import logging

import chordlayers
import chordlayers.__main__
import chordlayers.export
import chordlayers.midi_utils
import chordlayers.voices

logging.basicConfig(level=logging.INFO)

MIDI_DEVICE = None

session = chordlayers.Session(
	progression = chordlayers.find_progression("pop", "vi-IV-I-V"),
	bpm = 110,
	genre = "pop"
)

drums = chordlayers.new_layer("drums", "k h s h k k s h")
bass = chordlayers.new_layer("bass", "A2 - A2 - | F2 - F2 - | C3 - C3 - | G2 - G2 B2", existing=[drums])
lead = chordlayers.new_layer("melody", "E5 C5 A4 - | F5 - A4 C5 | G5 - E5 - | D5 B4 G4 -", existing=[drums, bass])

session = session.with_layer(drums).with_layer(bass).with_layer(lead)

if __name__ == "__main__":

	chordlayers.export.write_files(chordlayers.export_session(session), "out")

	device_name, midi_out = chordlayers.midi_utils.select_output_device(MIDI_DEVICE)

	if midi_out is not None:

		player = chordlayers.Player(chordlayers.voices.MidiVoiceSet.factory(midi_out), genre=session.genre)

		try:
			asyncio.run(chordlayers.__main__.run_until_stopped(player, session))
		except KeyboardInterrupt:
			pass
		finally:
			midi_out.close()

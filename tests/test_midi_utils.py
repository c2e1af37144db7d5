import chordlayers.midi_utils
import conftest


def test_list_output_devices (patch_midi: None) -> None:

	"""Device names come straight from mido."""

	assert chordlayers.midi_utils.list_output_devices() == ["Dummy MIDI", "Other MIDI"]


def test_select_named_device (patch_midi: None) -> None:

	"""A named device that exists is opened."""

	name, midi_out = chordlayers.midi_utils.select_output_device("Other MIDI")

	assert name == "Other MIDI"
	assert midi_out is conftest._current_fake_output


def test_select_first_device (patch_midi: None) -> None:

	"""Without a name the first device is opened."""

	name, midi_out = chordlayers.midi_utils.select_output_device()

	assert name == "Dummy MIDI"
	assert isinstance(midi_out, conftest.FakeMidiOut)


def test_select_missing_device (patch_midi: None) -> None:

	"""An unknown device name fails without raising."""

	assert chordlayers.midi_utils.select_output_device("Nope") == (None, None)


def test_no_devices (monkeypatch) -> None:

	"""With no outputs available nothing is opened."""

	monkeypatch.setattr(chordlayers.midi_utils.mido, "get_output_names", lambda: [])

	assert chordlayers.midi_utils.select_output_device() == (None, None)

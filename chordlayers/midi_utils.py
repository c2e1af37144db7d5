import logging
import typing

import mido

logger = logging.getLogger(__name__)


def list_output_devices () -> typing.List[str]:

	"""
	Return the names of the available MIDI output devices.
	"""

	return list(mido.get_output_names())


def select_output_device (device_name: typing.Optional[str] = None) -> typing.Tuple[typing.Optional[str], typing.Optional[typing.Any]]:

	"""
	Select and open a MIDI output device for live playback.

	If `device_name` is provided, opens that device, or fails when it is not
	present. If `device_name` is None, the first available device is opened;
	when several exist the choice is logged along with the alternatives so the
	user can pick one explicitly next time.

	Returns:
		A tuple of (device_name, midi_out_object) or (None, None) on failure.
	"""

	try:
		outputs = list_output_devices()
		logger.info(f"Available MIDI outputs: {outputs}")

		if not outputs:
			logger.error("No MIDI output devices found.")
			return None, None

		if device_name is not None:
			if device_name not in outputs:
				logger.error(
					f"MIDI output device '{device_name}' not found. "
					f"Available devices: {outputs}"
				)
				return None, None

			selected_name = device_name

		else:
			selected_name = outputs[0]

			if len(outputs) > 1:
				logger.warning(
					f"Several MIDI outputs found - using '{selected_name}'. "
					f"Pass --device to choose one of {outputs}"
				)

		midi_out = mido.open_output(selected_name)
		logger.info(f"Opened MIDI output: {selected_name}")
		return selected_name, midi_out

	except Exception as e:
		logger.error(f"Failed to open MIDI output: {e}")
		return None, None

"""General MIDI drum notes used by drum layers.

Drum layers are written with single-letter symbols. Each symbol maps to a
General MIDI Level 1 percussion note, so exported drum files play the right
sounds on any GM-compatible instrument (channel 10 in GM numbering)::

    import chordlayers.constants.gm_drums as gm_drums

    gm_drums.DRUM_SYMBOL_MAP["k"]   # 36, kick
    gm_drums.DRUM_SYMBOL_MAP["s"]   # 38, snare
    gm_drums.DRUM_SYMBOL_MAP["h"]   # 42, closed hi-hat

Any other symbol in a drum layer (including ``-``) is a rest.
"""

import typing


KICK_1 = 36
SNARE_1 = 38
HI_HAT_CLOSED = 42

# 0-indexed channel that GM devices reserve for percussion.
GM_DRUM_CHANNEL = 9

DRUM_SYMBOL_MAP: typing.Dict[str, int] = {
	"k": KICK_1,
	"s": SNARE_1,
	"h": HI_HAT_CLOSED,
}

# Routing keys handed to voice sets for live playback.
DRUM_SYMBOL_ROUTE: typing.Dict[str, str] = {
	"k": "kick",
	"s": "snare",
	"h": "hihat",
}

"""Type hints for option values and pass-through svg attributes.

:author: Shay Hill
:created: 2025-07-09
"""

from collections.abc import Mapping
from typing import TypeAlias

# Types text_to_svg can format when writing `name="value"` attribute pairs.
ElemAttrib: TypeAlias = str | float | None

# Any value a TextOptions field will accept.
OptionValue: TypeAlias = str | float | bool | Mapping[str, ElemAttrib] | None

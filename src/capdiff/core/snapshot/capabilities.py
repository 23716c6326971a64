"""The capability enumeration reported by the capslock analyzer.

The numeric values and their order match the analyzer's protobuf
``Capability`` enum. Report ordering sorts on these values, so they must not
be renumbered.
"""

from __future__ import annotations

from enum import IntEnum

_WIRE_PREFIX = "CAPABILITY_"


class Capability(IntEnum):
    """A category of sensitive operation attributed to a package.

    The analyzer emits members by their wire name (``CAPABILITY_NETWORK``),
    which is also how they are rendered in reports. ``parse`` additionally
    accepts the bare member name in any case (``network``) and the integer
    value, as protobuf JSON permits. An integer with no name here (from a
    newer analyzer) becomes an unnamed member that sorts by its number and
    renders as that number.
    """

    UNSPECIFIED = 0
    SAFE = 1
    FILES = 2
    NETWORK = 3
    RUNTIME = 4
    READ_SYSTEM_STATE = 5
    MODIFY_SYSTEM_STATE = 6
    OPERATING_SYSTEM = 7
    SYSTEM_CALLS = 8
    ARBITRARY_EXECUTION = 9
    CGO = 10
    UNANALYZED = 11
    UNSAFE_POINTER = 12
    REFLECT = 13
    EXEC = 14

    @classmethod
    def _missing_(cls, value: object) -> Capability | None:
        # Proto3 enums are open: a newer analyzer may emit numbers this
        # table does not name yet. Keep them as unnamed members.
        if isinstance(value, int) and not isinstance(value, bool):
            member = int.__new__(cls, value)
            member._name_ = str(value)
            member._value_ = value
            return member
        return None

    @property
    def known(self) -> bool:
        """True for values named in this enumeration."""
        return self._name_ in type(self).__members__

    @property
    def wire_name(self) -> str:
        """Return the analyzer's spelling, e.g. ``CAPABILITY_FILES``.

        Unnamed values render as their number, as the analyzer does.
        """
        if not self.known:
            return str(self._value_)
        return _WIRE_PREFIX + self.name

    @classmethod
    def parse(cls, value: object) -> Capability:
        """Convert an analyzer JSON value into a Capability.

        Args:
            value: A wire name, a bare name, or an integer enum value.
                Integers outside the named range are kept as unnamed
                members.

        Returns:
            The matching Capability member.

        Raises:
            ValueError: If the value names no known capability.
        """
        if isinstance(value, bool):
            raise ValueError(f"invalid capability value: {value!r}")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            name = value.strip().upper()
            if name.startswith(_WIRE_PREFIX):
                name = name[len(_WIRE_PREFIX):]
            try:
                return cls[name]
            except KeyError:
                pass
        raise ValueError(f"unknown capability: {value!r}")

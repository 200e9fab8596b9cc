import enum
from dataclasses import dataclass


class DisplayTimeFormat(enum.Enum):
    """
    How timestamps are rendered by a converter.
    """

    UTC = "u"
    LOGGER_LOCAL_TIME = "l"
    PC_LOCAL_TIME = "p"

    @classmethod
    def from_option(cls, value: str) -> "DisplayTimeFormat":
        """
        Select a format from the first character of ``value``. Anything other
        than ``u`` or ``p`` (including an empty string) selects logger local
        time.
        """
        first = value[:1]
        if first == cls.UTC.value:
            return cls.UTC
        if first == cls.PC_LOCAL_TIME.value:
            return cls.PC_LOCAL_TIME
        return cls.LOGGER_LOCAL_TIME


class ParseOptionStatus(enum.Flag):
    """
    Outcome of option parsing. Flags from the driver and the converter are
    OR-ed together and resolved afterwards in this priority:
    UNRECOGNIZED_OPTION, DISPLAY_HELP, DISPLAY_VERSION, NO_INPUT_FILES.
    """

    NO_ERROR = 0
    DISPLAY_HELP = enum.auto()
    DISPLAY_VERSION = enum.auto()
    NO_INPUT_FILES = enum.auto()
    UNRECOGNIZED_OPTION = enum.auto()


@dataclass
class CommonOptions:
    """
    Preferences shared between the driver and the converter. Populated while
    parsing, read-only afterwards.
    """

    non_interactive: bool = False
    display_time_format: DisplayTimeFormat = DisplayTimeFormat.LOGGER_LOCAL_TIME

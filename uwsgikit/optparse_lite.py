"""A reentrant getopt-style option parser with GNU-style long options."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence

MSG_INVALID = "invalid option"
MSG_MISSING = "option requires an argument"
MSG_TOOMANY = "option takes no arguments"

_ERRMSG_SIZE = 64


class ArgType(IntEnum):
    """Whether an option takes an argument."""

    NONE = 0
    REQUIRED = 1
    OPTIONAL = 2


@dataclass(frozen=True)
class LongOption:
    """A long option with an optional single-character short name."""

    longname: Optional[str]
    shortname: Optional[str] = None
    argtype: ArgType = ArgType.NONE


class OptionError(Exception):
    """Raised for an unknown option or a missing or unexpected argument."""

    def __init__(self, message: str, option: str) -> None:
        prefix = f"{message} -- '"
        room = max(0, _ERRMSG_SIZE - 2 - len(prefix))
        self.errmsg = prefix + option[:room] + "'"
        self.option = option
        super().__init__(self.errmsg)


def _is_dashdash(arg: Optional[str]) -> bool:
    return arg == "--"


def _is_shortopt(arg: Optional[str]) -> bool:
    return arg is not None and len(arg) >= 2 and arg[0] == "-" and arg[1] != "-"


def _is_longopt(arg: Optional[str]) -> bool:
    return arg is not None and len(arg) > 2 and arg.startswith("--")


def _argtype(optstring: str, char: str) -> Optional[ArgType]:
    if char == ":":
        return None
    index = optstring.find(char)
    if index == -1:
        return None
    colons = optstring[index + 1 : index + 3]
    if colons.startswith(":"):
        return ArgType.OPTIONAL if colons == "::" else ArgType.REQUIRED
    return ArgType.NONE


def _optstring_from_long(longopts: Sequence[LongOption]) -> str:
    return "".join(
        opt.shortname + ":" * int(opt.argtype) for opt in longopts if opt.shortname
    )


class OptParser:
    """Parser state over an argument vector whose first item is the program name.

    With ``permute`` enabled, non-option arguments are moved to the end of
    ``argv`` as parsing proceeds.
    """

    def __init__(self, argv: Sequence[str], permute: bool = True) -> None:
        self.argv = list(argv)
        self.permute = permute
        self.optind = 1
        self.optopt: Optional[str] = None
        self.optarg: Optional[str] = None
        self._subopt = 0

    def _current(self) -> Optional[str]:
        return self.argv[self.optind] if self.optind < len(self.argv) else None

    def _permute(self, index: int) -> None:
        self.argv.insert(self.optind - 1, self.argv.pop(index))

    def _skip_nonoption(self, parse):
        index = self.optind
        self.optind += 1
        try:
            return parse()
        finally:
            self._permute(index)
            self.optind -= 1

    def getopt(self, optstring: str) -> Optional[str]:
        """Return the next option character, or None when options are exhausted.

        The option's argument, if any, is left in ``optarg``.
        """
        option = self._current()
        self.optopt = None
        self.optarg = None
        if option is None:
            return None
        if _is_dashdash(option):
            self.optind += 1
            return None
        if not _is_shortopt(option):
            if self.permute:
                return self._skip_nonoption(lambda: self.getopt(optstring))
            return None

        pos = self._subopt + 1
        char = option[pos]
        rest = option[pos + 1 :]
        self.optopt = char
        argtype = _argtype(optstring, char)
        following = self.argv[self.optind + 1] if self.optind + 1 < len(self.argv) else None

        if argtype is None:
            self._subopt = 0
            self.optind += 1
            raise OptionError(MSG_INVALID, char)
        if argtype is ArgType.NONE:
            if rest:
                self._subopt += 1
            else:
                self._subopt = 0
                self.optind += 1
            return char

        self._subopt = 0
        self.optind += 1
        if argtype is ArgType.REQUIRED:
            if rest:
                self.optarg = rest
            elif following is not None:
                self.optarg = following
                self.optind += 1
            else:
                raise OptionError(MSG_MISSING, char)
        else:
            self.optarg = rest or None
        return char

    def arg(self) -> Optional[str]:
        """Step over and return the next argument, or None if there is none."""
        option = self._current()
        self._subopt = 0
        if option is not None:
            self.optind += 1
        return option

    def _long_fallback(self, longopts: Sequence[LongOption]) -> Optional[LongOption]:
        result = self.getopt(_optstring_from_long(longopts))
        if result is None:
            return None
        matched = None
        for opt in longopts:
            if opt.shortname == self.optopt:
                matched = opt
        return matched

    def getopt_long(self, longopts: Sequence[LongOption]) -> Optional[LongOption]:
        """Return the next option matched against ``longopts``, or None when done.

        Short options are looked up by their short names. The argument, if
        any, is left in ``optarg``.
        """
        option = self._current()
        if option is None:
            return None
        if _is_dashdash(option):
            self.optind += 1
            return None
        if _is_shortopt(option):
            return self._long_fallback(longopts)
        if not _is_longopt(option):
            if self.permute:
                return self._skip_nonoption(lambda: self.getopt_long(longopts))
            return None

        self.optopt = None
        self.optarg = None
        body = option[2:]
        self.optind += 1
        name, has_value, value = body.partition("=")
        for opt in longopts:
            if opt.longname is None or opt.longname != name:
                continue
            self.optopt = opt.shortname
            if opt.argtype is ArgType.NONE and has_value:
                raise OptionError(MSG_TOOMANY, opt.longname)
            if has_value:
                self.optarg = value
            elif opt.argtype is ArgType.REQUIRED:
                self.optarg = self._current()
                if self.optarg is None:
                    raise OptionError(MSG_MISSING, opt.longname)
                self.optind += 1
            return opt
        raise OptionError(MSG_INVALID, body)
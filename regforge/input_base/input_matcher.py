"""regforge.input_base.input_matcher

Pattern-based recognition of textual input values.

A feature may declare one :class:`InputMatcher`. Matching a raw value yields a
:class:`MatchResult` (or ``None``), which lets a single textual input select
among build paths without the caller classifying it first, e.g. a bit-field
position written either as ``"7"`` or as ``"7:4"``.

Options
-------
match_wholly:
    Anchor every pattern at both ends (default ``True``).
ignore_blanks:
    Strip spaces and tabs from the input before matching (default ``True``).
match_automatically:
    Match the last build argument before the build actions run and pass the
    result to them as ``match=`` (default ``True``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Pattern, Sequence, Tuple, Union

PatternLike = Union[str, Pattern[str]]

_BLANKS_RE = re.compile(r"[ \t]")


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a successful match.

    ``data`` is the converter's return value when a converter was given,
    otherwise the :class:`re.Match` itself. ``index`` identifies which pattern
    matched (its position, or its key when patterns were given as a mapping).
    """

    data: Any
    index: Any
    match: "re.Match[str]"

    @property
    def captures(self) -> Tuple[Any, ...]:
        return self.match.groups()

    @property
    def named_captures(self) -> Dict[str, Any]:
        return self.match.groupdict()


class InputMatcher:
    def __init__(
        self,
        patterns: Union[PatternLike, Sequence[PatternLike], Mapping[Any, PatternLike]],
        converter: Optional[Callable[[re.Match], Any]] = None,
        *,
        match_wholly: bool = True,
        ignore_blanks: bool = True,
        match_automatically: bool = True,
    ) -> None:
        self.converter = converter
        self.match_wholly = match_wholly
        self.ignore_blanks = ignore_blanks
        self.match_automatically = match_automatically
        self._patterns = self._compile(patterns)

    def _compile(self, patterns: Any) -> Dict[Any, Pattern[str]]:
        if isinstance(patterns, Mapping):
            items = list(patterns.items())
        elif isinstance(patterns, (str, re.Pattern)):
            items = [(0, patterns)]
        else:
            items = list(enumerate(patterns))

        compiled: Dict[Any, Pattern[str]] = {}
        for index, pattern in items:
            source = pattern.pattern if isinstance(pattern, re.Pattern) else str(pattern)
            flags = pattern.flags if isinstance(pattern, re.Pattern) else 0
            if self.match_wholly:
                source = rf"\A(?:{source})\Z"
            compiled[index] = re.compile(source, flags)
        return compiled

    def _format_input(self, value: Any) -> str:
        text = "" if value is None else str(value)
        if self.ignore_blanks:
            text = _BLANKS_RE.sub("", text)
        return text

    def match(self, value: Any) -> Optional[MatchResult]:
        text = self._format_input(value)
        for index, pattern in self._patterns.items():
            m = pattern.search(text)
            if m is None:
                continue
            data = self.converter(m) if self.converter is not None else m
            return MatchResult(data=data, index=index, match=m)
        return None

"""Emphasis parsing for the llaves parser.

Implements the CommonMark delimiter algorithm for emphasis and strong,
plus GFM ``~~`` strikethrough.
See: https://spec.commonmark.org/0.31.2/#emphasis-and-strong-emphasis

Thread Safety:
All methods are stateless or use call-local state only.

"""

from llaves.location import SourceLocation
from llaves.nodes import Emphasis, Inline, Strikethrough, Strong, Text
from llaves.parsing.charsets import is_unicode_punctuation, is_unicode_whitespace
from llaves.parsing.inline.tokens import DelimiterRun, InlineItem


class EmphasisMixin:
    """Mixin for emphasis delimiter processing.

    Required Host Attributes: None

    """

    def _is_left_flanking(self, before: str, after: str) -> bool:
        """Not followed by whitespace, and not followed by punctuation
        unless preceded by whitespace or punctuation."""
        if is_unicode_whitespace(after):
            return False
        if not is_unicode_punctuation(after):
            return True
        return is_unicode_whitespace(before) or is_unicode_punctuation(before)

    def _is_right_flanking(self, before: str, after: str) -> bool:
        """Mirror image of left-flanking."""
        if is_unicode_whitespace(before):
            return False
        if not is_unicode_punctuation(before):
            return True
        return is_unicode_whitespace(after) or is_unicode_punctuation(after)

    def _make_delimiter_run(self, char: str, count: int, before: str, after: str) -> DelimiterRun:
        """Build a delimiter run with its open/close capabilities."""
        left = self._is_left_flanking(before, after)
        right = self._is_right_flanking(before, after)
        if char == "_":
            can_open = left and (not right or is_unicode_punctuation(before))
            can_close = right and (not left or is_unicode_punctuation(after))
        else:
            can_open = left
            can_close = right
        return DelimiterRun(char=char, count=count, can_open=can_open, can_close=can_close)  # type: ignore[arg-type]

    def _find_opener(self, items: list[InlineItem], closer_idx: int) -> int | None:
        """Nearest earlier run that can open for the closer at ``closer_idx``."""
        closer = items[closer_idx]
        assert isinstance(closer, DelimiterRun)
        for idx in range(closer_idx - 1, -1, -1):
            opener = items[idx]
            if not isinstance(opener, DelimiterRun):
                continue
            if opener.char != closer.char or not opener.can_open or not opener.count:
                continue
            if closer.char == "~":
                return idx

            # Rule of 3: a run that can both open and close cannot match
            # when the sum of the original lengths is a multiple of 3.
            if (
                (opener.can_close or closer.can_open)
                and closer.original_count % 3 != 0
                and (opener.original_count + closer.original_count) % 3 == 0
            ):
                continue
            return idx
        return None

    def _process_emphasis(self, items: list[InlineItem], location: SourceLocation) -> None:
        """Match delimiter runs in place, wrapping content in emphasis nodes."""
        idx = 0
        while idx < len(items):
            closer = items[idx]
            if not isinstance(closer, DelimiterRun) or not closer.can_close or not closer.count:
                idx += 1
                continue

            opener_idx = self._find_opener(items, idx)
            if opener_idx is None:
                idx += 1
                continue

            opener = items[opener_idx]
            assert isinstance(opener, DelimiterRun)

            used = 2 if opener.count >= 2 and closer.count >= 2 else 1
            opener.count -= used
            closer.count -= used

            children = self._finish_inline(items[opener_idx + 1 : idx], location)
            node: Inline
            if closer.char == "~":
                node = Strikethrough(location=location, children=children)
            elif used == 2:
                node = Strong(location=location, children=children)
            else:
                node = Emphasis(location=location, children=children)

            items[opener_idx + 1 : idx] = [node]
            closer_pos = opener_idx + 2
            if not opener.count:
                del items[opener_idx]
                closer_pos -= 1
            if not closer.count:
                del items[closer_pos]
            idx = closer_pos

    def _finish_inline(self, items: list[InlineItem], location: SourceLocation) -> tuple[Inline, ...]:
        """Turn leftover runs into text and merge adjacent text nodes."""
        result: list[Inline] = []
        for item in items:
            if isinstance(item, DelimiterRun):
                if not item.count:
                    continue
                item = Text(location=location, content=item.char * item.count)
            if isinstance(item, Text) and result and isinstance(result[-1], Text):
                result[-1] = Text(location=result[-1].location, content=result[-1].content + item.content)
            else:
                result.append(item)
        return tuple(result)

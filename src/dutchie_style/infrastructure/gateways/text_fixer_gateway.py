"""Text Fixer Gateway - splices TextEdits into source text."""

from collections.abc import Sequence

from dutchie_style.domain.entities import TextEdit
from dutchie_style.domain.protocols import FixerGatewayProtocol


class TextFixerGateway(FixerGatewayProtocol):
    """Gateway for applying insertion-only corrections."""

    def apply_edits(self, source: str, edits: Sequence[TextEdit]) -> str:
        """
        Apply insertions to ``source``.

        Positions are byte offsets into the UTF-8 encoding of ``source``, as
        produced by the parser gateway. Edits are applied in position order;
        edits sharing a position keep the order they were given in.

        Raises:
            ValueError: an edit points outside the source.
        """
        if not edits:
            return source
        data = source.encode("utf-8")
        pieces: list[bytes] = []
        cursor = 0
        for edit in sorted(edits, key=lambda e: e.position):
            if not 0 <= edit.position <= len(data):
                raise ValueError(f"Edit position {edit.position} outside source of {len(data)} bytes")
            pieces.append(data[cursor:edit.position])
            pieces.append(edit.content.encode("utf-8"))
            cursor = edit.position
        pieces.append(data[cursor:])
        return b"".join(pieces).decode("utf-8")

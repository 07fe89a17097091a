# taskquery/parser/engine.py
"""
Query parser: free text -> candidate token sequences.

The grammar is deliberately ambiguous (any span may also be plain content),
so lark's Earley parser is run with ambiguity="explicit" and the resulting
shared forest is read here. Every `element` and `content` node in the forest
is a piece: a classified span of the text. Any chain of pieces that covers
the text from start to end is a parse, so the forest is read as a lattice
over text positions and candidates are its paths, ordered by

    (characters left as content, number of markers and date phrases)

lowest first; ties keep lark's derivation order (ordered_sets=True makes that
order stable). The first candidate is therefore the parse that recognizes the
most text using the fewest, longest markers and date phrases. Adjacent
content pieces are merged into one content token.
"""

from __future__ import annotations
import heapq
import logging
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple, Union

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from taskquery.grammar import get_vocabulary, load_parser
from taskquery.schemas.token import QueryToken, TokenKind, TokenSequence

logger = logging.getLogger(__name__)

DEFAULT_MAX_CANDIDATES = 16
DEFAULT_MAX_QUERY_LENGTH = 500

# complete paths inspected per requested candidate before giving up on duplicates
_SCAN_FACTOR = 16

Score = Tuple[int, int]
Node = Union[Tree, Token]

# `_iambig` only survives if lark leaves an intermediate ambiguity unexpanded
_AMBIG = ("_ambig", "_iambig")
_CONTENT = "content"
_ELEMENT = "element"
_ZERO: Score = (0, 0)


class Piece(NamedTuple):
    start: int
    end: int
    token: QueryToken

    @property
    def score(self) -> Score:
        if self.token.kind == TokenKind.CONTENT:
            return (self.end - self.start, 0)
        return (0, 1)


def _add(a: Score, b: Score) -> Score:
    return (a[0] + b[0], a[1] + b[1])


class QueryParser:
    """
    Parses query text for one locale.

    Usage:
        candidates = QueryParser("en").parse("buy milk @errand tomorrow")
        best = candidates[0]
    """

    def __init__(
        self,
        locale: str = "en",
        max_candidates: int = DEFAULT_MAX_CANDIDATES,
        max_query_length: int = DEFAULT_MAX_QUERY_LENGTH,
    ):
        get_vocabulary(locale)  # unknown locales fail here, before any text is seen
        if max_candidates < 1:
            raise ValueError("max_candidates must be at least 1")
        if max_query_length < 1:
            raise ValueError("max_query_length must be at least 1")
        self.locale = locale
        self.max_candidates = max_candidates
        self.max_query_length = max_query_length
        self._lark: Lark = load_parser(locale)

    # --------------------------------------------------------------
    # MAIN ENTRYPOINTS
    # --------------------------------------------------------------
    def parse(self, text: str) -> List[TokenSequence]:
        """All candidate sequences (at least one). The first is authoritative."""
        candidates = list(self.iter_parses(text))
        logger.debug(
            "Parsed query into %d candidate(s)",
            len(candidates),
            extra={"locale": self.locale, "candidates": len(candidates)},
        )
        return candidates

    def iter_parses(self, text: str) -> Iterator[TokenSequence]:
        """Lazily yield distinct candidate sequences, best first."""
        if not isinstance(text, str):
            raise TypeError("text must be a str")

        if not text:
            yield [QueryToken.of(TokenKind.CONTENT, "", 0)]
            return

        if len(text) > self.max_query_length:
            logger.warning(
                "Query of %d characters exceeds limit of %d; treating it as plain content",
                len(text), self.max_query_length,
                extra={"locale": self.locale},
            )
            yield [QueryToken.of(TokenKind.CONTENT, text, 0)]
            return

        try:
            tree = self._lark.parse(text)
        except UnexpectedInput as e:
            logger.warning("Query could not be parsed (%s); treating it as plain content", e,
                           extra={"locale": self.locale})
            yield [QueryToken.of(TokenKind.CONTENT, text, 0)]
            return

        yield from ForestReader(text).candidates(tree, self.max_candidates)


class ForestReader:
    """
    Reads one parse forest (a lark tree that may hold `_ambig` nodes and
    shares subtrees between alternatives) into token sequences.

    `element` and `content` subtrees are read as pieces; everything above
    them is structure and only walked. Spans are memoized per node, so a
    reader must not outlive its tree.
    """

    def __init__(self, text: str):
        self.text = text
        self._spans: Dict[int, Tuple[int, int]] = {}

    def candidates(self, tree: Tree, limit: int) -> Iterator[TokenSequence]:
        ending: Dict[int, List[Piece]] = {}
        for piece in self.pieces(tree):
            ending.setdefault(piece.end, []).append(piece)
        best = self._best_prefixes(ending)
        end = len(self.text)
        if end not in best:
            return

        # Paths are grown right to left. The priority of a partial path is its
        # own score plus the best score of any prefix that completes it, so
        # complete paths leave the heap best first. Among equal priorities the
        # newest entry pops first, which finishes one path before opening others.
        counter = 0
        heap = [(best[end], counter, end, _ZERO, None)]
        seen = set()
        emitted = 0
        scanned = 0
        while heap:
            _priority, _order, position, suffix_score, suffix = heapq.heappop(heap)
            if position == 0:
                scanned += 1
                sequence = self._sequence(suffix)
                signature = tuple(token.signature() for token in sequence)
                if signature not in seen:
                    seen.add(signature)
                    emitted += 1
                    yield sequence
                    if emitted >= limit:
                        return
                if scanned >= limit * _SCAN_FACTOR:
                    return
                continue

            # pushed last pops first: derivation order among ties
            for piece in reversed(ending.get(position, ())):
                if piece.start not in best:
                    continue
                counter -= 1
                score = _add(piece.score, suffix_score)
                heapq.heappush(heap, (
                    _add(best[piece.start], score), counter, piece.start, score, (piece, suffix),
                ))

    # --------------------------------------------------------------
    # Lattice
    # --------------------------------------------------------------
    def pieces(self, tree: Tree) -> List[Piece]:
        """Distinct pieces of the forest, in derivation order."""
        found: Dict[Tuple[int, int, str], Piece] = {}
        visited = set()
        stack: List[Node] = [tree]
        while stack:
            node = stack.pop()
            if not isinstance(node, Tree) or id(node) in visited:
                continue
            visited.add(id(node))
            if node.data == _CONTENT:
                pieces = [self._piece(TokenKind.CONTENT, node)]
            elif node.data == _ELEMENT:
                pieces = [self._piece(kind, node) for kind in self._element_kinds(node)]
            else:
                stack.extend(reversed(node.children))
                continue
            for piece in pieces:
                found.setdefault((piece.start, piece.end, piece.token.kind), piece)
        return list(found.values())

    def _best_prefixes(self, ending: Dict[int, List[Piece]]) -> Dict[int, Score]:
        # every piece is non-empty, so its start is settled before its end is reached
        best: Dict[int, Score] = {0: _ZERO}
        for position in sorted(ending):
            for piece in ending[position]:
                if piece.start not in best:
                    continue
                score = _add(best[piece.start], piece.score)
                if position not in best or score < best[position]:
                    best[position] = score
        return best

    def _sequence(self, suffix: Optional[tuple]) -> TokenSequence:
        sequence: TokenSequence = []
        run: Optional[Tuple[int, int]] = None
        while suffix is not None:
            piece, suffix = suffix
            if piece.token.kind == TokenKind.CONTENT:
                run = (run[0] if run else piece.start, piece.end)
                continue
            if run:
                sequence.append(self._content_token(*run))
                run = None
            sequence.append(piece.token)
        if run:
            sequence.append(self._content_token(*run))
        return sequence

    # --------------------------------------------------------------
    # Tokens
    # --------------------------------------------------------------
    def _element_kinds(self, element: Tree) -> List[str]:
        kinds: List[str] = []
        stack: List[Node] = [element.children[0]]
        while stack:
            inner = stack.pop()
            if isinstance(inner, Tree) and inner.data in _AMBIG:
                stack.extend(reversed(inner.children))
                continue
            kind = str(inner.data) if isinstance(inner, Tree) else TokenKind.CONTENT
            if kind not in kinds:
                kinds.append(kind)
        return kinds

    def _piece(self, kind: str, node: Tree) -> Piece:
        start, end = self._span(node)
        raw = self.text[start:end]
        return Piece(start, end, QueryToken.of(kind, normalize_value(kind, raw), start, end))

    def _content_token(self, start: int, end: int) -> QueryToken:
        return QueryToken.of(TokenKind.CONTENT, self.text[start:end], start, end)

    def _span(self, node: Node) -> Tuple[int, int]:
        if isinstance(node, Token):
            return node.start_pos, node.start_pos + len(node)
        key = id(node)
        if key not in self._spans:
            leaves = list(node.scan_values(lambda v: isinstance(v, Token)))
            if not leaves:
                raise ValueError(f"Parse tree node {node.data!r} covers no text")
            self._spans[key] = (
                min(t.start_pos for t in leaves),
                max(t.start_pos + len(t) for t in leaves),
            )
        return self._spans[key]


def normalize_value(kind: str, raw: str) -> str:
    """Strip marker sigils: "@home" -> "home", "#[Big Project]" -> "Big Project", "!!1" -> "1"."""
    if kind == TokenKind.LABEL:
        return raw[1:]
    if kind == TokenKind.PROJECT:
        name = raw[1:]
        if name.startswith("[") and name.endswith("]"):
            name = name[1:-1].strip()
        return name
    if kind == TokenKind.PRIORITY:
        return raw[2:]
    return raw

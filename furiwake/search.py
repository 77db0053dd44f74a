"""
Segment search for furiwake.

Enumerates every way to split an entry's written form into kana passed
through literally and windows assigned one of their candidate readings,
such that the readings put together reproduce the entry's reading.

The search works on states (kanji_pos, reading_pos): how many characters
of the written form and of the reading have been consumed. From a state,
a transition either passes a kana through (it must equal the next reading
character) or assigns a window starting at kanji_pos one of its
candidates (it must be a prefix of the remaining reading). kanji_pos
strictly increases along every transition, so the states form a DAG.

The search runs in two passes with explicit stacks:

1. Explore the state graph once and mark the states from which the
   accepting state (len(runes), len(reading)) can be reached.
2. Enumerate the paths from the initial state that stay on live states.
   Each enumerated path is a complete solution, and dead branches are
   never walked more than once.
"""

import logging
from typing import Dict, List, Optional, Set, Tuple

from furiwake import settings
from furiwake.cache import CandidateCache
from furiwake.characters import as_hiragana, is_kana, is_kana_equivalent
from furiwake.entry import Entry, Window
from furiwake.solution import Part

logger = logging.getLogger(__name__)

State = Tuple[int, int]
Transition = Tuple[State, Part]
Path = Tuple[Part, ...]


class SearchBudgetExceeded(RuntimeError):
    """Raised when an entry needs more search steps than allowed."""


class SegmentSearch:
    """
    Backtracking search over the decompositions of an entry.

    Args:
        cache: Candidate reading cache (shared across entries).
        max_steps: Maximum number of state expansions and path extensions
            per entry. None uses settings.MAX_SEARCH_STEPS; 0 disables
            the limit.
    """

    def __init__(self, cache: CandidateCache, max_steps: Optional[int] = None):
        self.cache = cache
        self.max_steps = settings.MAX_SEARCH_STEPS if max_steps is None else max_steps

    @property
    def max_window(self) -> int:
        """Longest window to look up: one character, or the longest expression."""
        return max(1, self.cache.resources.max_expression_length)

    def transitions(self, entry: Entry, kanji_pos: int, reading_pos: int) -> List[Transition]:
        """
        List the transitions out of a state.

        Args:
            entry: Entry being solved.
            kanji_pos: Characters of the written form consumed so far.
            reading_pos: Characters of the reading consumed so far.

        Returns:
            (next state, part) pairs, without duplicates, in a stable order.
        """
        runes = entry.runes
        remaining = entry.normalized_reading[reading_pos:]
        found: Dict[Transition, None] = {}

        if kanji_pos >= len(runes) or not remaining:
            return []

        char = runes[kanji_pos]
        if is_kana(char) and as_hiragana(char) == remaining[0]:
            found[((kanji_pos + 1, reading_pos + 1), Part(entry.raw_runes[kanji_pos]))] = None

        longest = min(self.max_window, len(runes) - kanji_pos)
        for length in range(1, longest + 1):
            window = Window(entry, kanji_pos, length)
            for candidate in sorted(self.cache.candidates_for(entry, window)):
                if not remaining.startswith(candidate):
                    continue
                end = reading_pos + len(candidate)
                if is_kana_equivalent(window.raw_text, candidate):
                    part = Part(window.raw_text)
                else:
                    # Keep the reading as written (katakana stays katakana)
                    part = Part(window.raw_text, entry.reading[reading_pos:end])
                found[((window.end, end), part)] = None

        return list(found)

    def search(self, entry: Entry) -> List[Path]:
        """
        Enumerate all complete decompositions of an entry.

        Args:
            entry: Entry to solve.

        Returns:
            One tuple of parts per decomposition reproducing the reading.

        Raises:
            SearchBudgetExceeded: If the entry needs more than max_steps steps.
        """
        steps = 0

        def step():
            nonlocal steps
            steps += 1
            if self.max_steps and steps > self.max_steps:
                raise SearchBudgetExceeded(
                    f"Search for {entry} exceeded {self.max_steps} steps"
                )

        start: State = (0, 0)
        accepting: State = (len(entry.runes), len(entry.normalized_reading))

        # Pass 1: live states
        edges: Dict[State, List[Transition]] = {}
        live: Set[State] = set()
        visited: Set[State] = set()
        stack: List[Tuple[State, bool]] = [(start, False)]

        while stack:
            state, expanded = stack.pop()
            if expanded:
                if any(target in live for target, _ in edges[state]):
                    live.add(state)
                continue
            if state in visited:
                continue
            visited.add(state)
            step()

            if state == accepting:
                edges[state] = []
                live.add(state)
                continue

            edges[state] = self.transitions(entry, *state)
            stack.append((state, True))
            for target, _ in edges[state]:
                if target not in visited:
                    stack.append((target, False))

        if start not in live:
            logger.debug(f"No decomposition for {entry} ({len(visited)} states explored)")
            return []

        # Pass 2: paths through live states
        paths: List[Path] = []
        path_stack: List[Tuple[State, Path]] = [(start, ())]
        while path_stack:
            state, parts = path_stack.pop()
            if state == accepting:
                paths.append(parts)
                continue
            for target, part in reversed(edges[state]):
                if target in live:
                    step()
                    path_stack.append((target, parts + (part,)))

        logger.debug(f"{len(paths)} decomposition(s) for {entry} in {steps} steps")
        return paths

"""Lookup table checked with a deferred logarithmic-derivative argument.

Entries are inserted first, then queried. Query results come from a hint;
their membership in the table is checked for all queries at once when the
builder commits, instead of one selection tree per query.
"""

from __future__ import annotations

from typing import Sequence

from hinted_glv.frontend.api import Builder, Operand, Variable
from hinted_glv.frontend.hints import hint


@hint
def logderiv_lookup_hint(mod: int, inputs: Sequence[int]) -> list[int]:
    """inputs = (n_entries, *entries, *indices) -> entries[index] per index."""
    n = inputs[0]
    entries = inputs[1 : 1 + n]
    indices = inputs[1 + n :]
    # out-of-range queries get 0 and are rejected when the table commits
    return [entries[i] if i < n else 0 for i in indices]


class LogDerivTable:
    def __init__(self, api: Builder) -> None:
        self.api = api
        self.entries: list[Operand] = []
        self._queries: list[tuple[Operand, Variable]] = []
        api.defer(self._commit)

    def insert(self, value: Operand) -> int:
        self.entries.append(value)
        return len(self.entries) - 1

    def lookup(self, *indices: Operand) -> list[Variable]:
        n = len(self.entries)
        results = self.api.new_hint(
            logderiv_lookup_hint, len(indices), n, *self.entries, *indices
        )
        self._queries.extend(zip(indices, results))
        return results

    def _commit(self, api: Builder) -> None:
        # one multiplicity per entry plus one inverse per query
        api.nb_constraints += len(self.entries) + 2 * len(self._queries)
        n = len(self.entries)
        for index, result in self._queries:
            i = api.value(index)
            if i >= n:
                api.fail(f"lookup: index {i} out of range for table of size {n}")
            elif api.value(result) != api.value(self.entries[i]):
                api.fail(f"lookup: query result at index {i} is not a table entry")

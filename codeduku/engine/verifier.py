"""CP-SAT cross-check of the uniqueness verdict using OR-Tools.

Models the same assignment problem the backtracking solver explores: every
slot takes a dictionary word of its length, a cell shared by several slots
shows the uppercase letter if any of those words has one there, and every
hint's letter codes must sum to its token modulo 62. An extra
constraint demands at least one cell differ (case-insensitively) from the
original grid, so any feasible model is an alternate solution.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from ortools.sat.python import cp_model

from ..core.codec import decode, encode, folded_code, letter_code
from ..core.constants import BASE62_MODULUS, HINT_PREFIX
from ..core.exceptions import SolverBudgetExceeded
from ..core.models import Hint, Position, WordSlot
from ..data.dictionary import WordDictionary
from ..utils.logger import get_logger
from .grid import PuzzleGrid

LOGGER = get_logger(__name__)

MAX_SYMBOL_VALUE = BASE62_MODULUS - 1
CASE_OFFSET = letter_code("A") - letter_code("a")


def find_alternate_solution(
    grid: PuzzleGrid,
    slots: Sequence[WordSlot],
    hints: Sequence[Hint],
    dictionary: WordDictionary,
    timeout: float = 30.0,
) -> Optional[Dict[Position, str]]:
    """Return ``{position: letter}`` of an alternate filling, or ``None`` if unique.

    Raises :class:`SolverBudgetExceeded` if CP-SAT stops before proving
    either outcome.
    """

    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: Cell variables (folded identity + uppercase flag)
    # ------------------------------------------------------------------
    covering: Dict[Position, List[int]] = {}
    for slot_index, slot in enumerate(slots):
        for pos in slot.cells:
            covering.setdefault(pos, []).append(slot_index)

    folded_vars = {
        (r, c): model.new_int_var(0, MAX_SYMBOL_VALUE, f"F_{r}_{c}") for r, c in covering
    }
    upper_vars = {(r, c): model.new_bool_var(f"U_{r}_{c}") for r, c in covering}
    slot_upper: Dict[Tuple[int, Position], cp_model.IntVar] = {
        (slot_index, pos): model.new_bool_var(f"u_{slot_index}_{pos[0]}_{pos[1]}")
        for pos, indices in covering.items()
        for slot_index in indices
    }

    # ------------------------------------------------------------------
    # Step 2: Per-slot table constraints
    # ------------------------------------------------------------------
    for slot_index, slot in enumerate(slots):
        words = dictionary.words_of_length(slot.length)
        if not words:
            LOGGER.debug("No words of length %d; model infeasible", slot.length)
            return None
        columns = [folded_vars[pos] for pos in slot.cells]
        columns += [slot_upper[(slot_index, pos)] for pos in slot.cells]
        tuples = [
            [folded_code(ch) for ch in word] + [int(ch.isupper()) for ch in word]
            for word in words
        ]
        model.add_allowed_assignments(columns, tuples)

    # A shared cell shows the uppercase letter if any covering word has one.
    for pos, indices in covering.items():
        model.add_max_equality(upper_vars[pos], [slot_upper[(i, pos)] for i in indices])

    # ------------------------------------------------------------------
    # Step 3: Hint checksums
    # ------------------------------------------------------------------
    for hint in hints:
        if any(pos not in covering for pos in hint.neighbors):
            # An uncovered neighbor never fills, so the hint can never fail.
            continue
        token = grid.cell(hint.row, hint.col).letter or hint.token
        target = decode(token[len(HINT_PREFIX)])
        wraps = model.new_int_var(
            0, (MAX_SYMBOL_VALUE * len(hint.neighbors)) // BASE62_MODULUS, f"K_{hint.row}_{hint.col}"
        )
        model.add(
            sum(folded_vars[pos] + CASE_OFFSET * upper_vars[pos] for pos in hint.neighbors)
            == BASE62_MODULUS * wraps + target
        )

    # ------------------------------------------------------------------
    # Step 4: Differ from the original somewhere
    # ------------------------------------------------------------------
    diffs: List[cp_model.IntVar] = []
    for (r, c), var in folded_vars.items():
        cell = grid.cell(r, c)
        if not cell.has_letter():
            continue
        original = folded_code(cell.letter)
        b = model.new_bool_var(f"d_{r}_{c}")
        model.add(var != original).only_enforce_if(b)
        model.add(var == original).only_enforce_if(~b)
        diffs.append(b)
    if not diffs:
        return None
    model.add_bool_or(diffs)

    # ------------------------------------------------------------------
    # Step 5: Solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = timeout
    solver.parameters.num_workers = 4

    LOGGER.info(
        "CP-SAT cross-check: %d slots, %d cells, %d hints (timeout=%0.1fs)",
        len(slots),
        len(covering),
        len(hints),
        timeout,
    )
    status = solver.solve(model)

    if status == cp_model.INFEASIBLE:
        LOGGER.info("CP-SAT: no alternate filling exists")
        return None
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        raise SolverBudgetExceeded(f"CP-SAT stopped with status {solver.status_name(status)}")

    alternate = {
        pos: encode(solver.value(var) + CASE_OFFSET * solver.value(upper_vars[pos]))
        for pos, var in folded_vars.items()
    }
    LOGGER.info("CP-SAT: alternate filling found in %.2fs", solver.wall_time)
    return alternate

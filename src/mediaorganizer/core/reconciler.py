"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/reconciler.py
Checks planned operations against the real destination tree. Read-only: never writes.

For each operation, candidates are probed in order: name.ext, name_1.ext, name_2.ext, ...
(in the planned directory, named after the source file):
  - reserved earlier in this call → skipped without touching the filesystem
  - does not exist                → final destination (copy / copy_renamed), reserved
  - holds identical content       → skipped_identical (nothing reserved)
  - holds different content       → next suffix
"""

import errno
import logging
import os
import stat
from typing import List, Optional, Set

from mediaorganizer.core.comparator import ContentComparatorImpl
from mediaorganizer.core.interfaces import ContentComparator
from mediaorganizer.core.models import Action, Decision, Operation
from mediaorganizer.core.planner import with_suffix

logger = logging.getLogger(__name__)


class DestinationReconcilerImpl:
    """
    Produces the final Decision for every planned Operation.
    Stat errors other than "not found" and comparison errors abort the batch.
    """

    def __init__(self, comparator: Optional[ContentComparator] = None):
        self.comparator = comparator or ContentComparatorImpl()

    def reconcile(
        self,
        operations: List[Operation],
        reserved: Optional[Set[str]] = None
    ) -> List[Decision]:
        if reserved is None:
            reserved = set()

        decisions = []
        for op in operations:
            decision = self._reconcile_one(op, reserved)
            logger.debug(f"{decision.action.value}: {op.source_path} -> {decision.final_destination_path}")
            decisions.append(decision)
        return decisions

    def _reconcile_one(self, op: Operation, reserved: Set[str]) -> Decision:
        base = os.path.join(os.path.dirname(op.destination_path), os.path.basename(op.source_path))
        source_size = os.stat(op.source_path).st_size

        n = 0
        while True:
            candidate = with_suffix(base, n)
            if candidate in reserved:
                n += 1
                continue

            try:
                st = os.stat(candidate)
            except OSError as e:
                if e.errno != errno.ENOENT:
                    raise
                reserved.add(candidate)
                return Decision(
                    source_path=op.source_path,
                    action=Action.COPY if n == 0 else Action.COPY_RENAMED,
                    destination_path=op.destination_path,
                    final_destination_path=candidate,
                )

            # A directory or other non-regular entry occupies the name but can never be identical
            if stat.S_ISREG(st.st_mode) and self.comparator.are_identical(
                    op.source_path, candidate, source_size, st.st_size):
                return Decision(
                    source_path=op.source_path,
                    action=Action.SKIPPED_IDENTICAL,
                    destination_path=op.destination_path,
                    final_destination_path=candidate,
                )

            n += 1

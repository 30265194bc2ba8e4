"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/decision_service.py
Bookkeeping over per-source Decisions: merging stage outputs and applying copy results.
"""
from collections import Counter
from dataclasses import replace
from typing import Dict, List

from mediaorganizer.core.models import Action, CopyResult, Decision, Operation


class DecisionService:
    @staticmethod
    def merge(
        order: List[str],
        dedupe_decisions: List[Decision],
        destination_decisions: List[Decision]
    ) -> List[Decision]:
        """
        Combines resolver and reconciler output into one Decision per source.

        Duplicate-source skips always win over destination reconciliation.
        A source with no decision from either stage is reported as failed.

        Args:
            order: Source paths in scan order
            dedupe_decisions: Output of the duplicate resolver
            destination_decisions: Output of the destination reconciler
        Returns:
            List[Decision] in the given order
        """
        dedupe_by_source = {d.source_path: d for d in dedupe_decisions}
        destination_by_source = {d.source_path: d for d in destination_decisions}

        merged = []
        for path in order:
            dedupe = dedupe_by_source.get(path)
            if dedupe is not None and dedupe.action == Action.SKIPPED_DUPLICATE_SOURCE:
                merged.append(dedupe)
            elif path in destination_by_source:
                merged.append(destination_by_source[path])
            else:
                merged.append(Decision(source_path=path, action=Action.FAILED, error="no decision produced"))
        return merged

    @staticmethod
    def operations_to_copy(decisions: List[Decision]) -> List[Operation]:
        """Pending copies, pointed at their final (post-collision) destination."""
        return [
            Operation(source_path=d.source_path, destination_path=d.final_destination_path)
            for d in decisions
            if d.action.is_pending_copy
        ]

    @staticmethod
    def apply_copy_results(decisions: List[Decision], results: List[CopyResult]) -> List[Decision]:
        """
        Flips pending copies to copied / copied_renamed / failed.
        Other decisions are returned unchanged.
        """
        results_by_source = {r.operation.source_path: r for r in results}

        updated = []
        for decision in decisions:
            if not decision.action.is_pending_copy:
                updated.append(decision)
                continue

            result = results_by_source.get(decision.source_path)
            if result is None:
                updated.append(replace(decision, action=Action.FAILED, error="missing copy result"))
            elif not result.success:
                updated.append(replace(decision, action=Action.FAILED, error=result.error or "copy failed"))
            elif decision.action == Action.COPY_RENAMED:
                updated.append(replace(decision, action=Action.COPIED_RENAMED))
            else:
                updated.append(replace(decision, action=Action.COPIED))
        return updated

    @staticmethod
    def summarize(decisions: List[Decision]) -> Dict[Action, int]:
        """Counts decisions per action (actions that never occur are omitted)."""
        counts = Counter(d.action for d in decisions)
        return {action: counts[action] for action in Action if counts[action]}

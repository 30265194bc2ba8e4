"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Implements file grouping strategies using SourceFile objects, a Hasher and a ContentComparator.
"""

from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional

from mediaorganizer.core.comparator import ContentComparatorImpl
from mediaorganizer.core.hasher import HasherImpl
from mediaorganizer.core.interfaces import ContentComparator, Hasher
from mediaorganizer.core.models import SourceFile


class FileGrouperImpl:
    """
    Groups files by size, by header fingerprint, and finally into clusters of
    byte-identical content.
    Uses injected Hasher and ContentComparator instances for flexibility and testability.

    Unlike a plain "find duplicates" grouper, single-file groups are returned too:
    the resolver keeps them outright.
    """

    def __init__(
        self,
        hasher: Optional[Hasher] = None,
        comparator: Optional[ContentComparator] = None
    ):
        self.hasher = hasher or HasherImpl()
        self.comparator = comparator or ContentComparatorImpl()

    def group_by_size(self, files: List[SourceFile]) -> Dict[int, List[SourceFile]]:
        """Groups files by their size."""
        return self._group_by(files, lambda f: f.size)

    def group_by_header_hash(self, files: List[SourceFile]) -> Dict[bytes, List[SourceFile]]:
        """Groups same-size files by the fingerprint of their header window."""
        return self._group_by(files, self.hasher.compute_header_hash)

    def cluster_by_content(self, files: List[SourceFile]) -> List[List[SourceFile]]:
        """
        Partitions files into clusters of identical content.

        Each file is compared only against the current cluster representatives
        (first member of each cluster): it joins the first identical one, or
        starts a new cluster. Clusters are addressed by index, in input order.
        """
        representatives: List[SourceFile] = []
        clusters: List[List[SourceFile]] = []

        for file in files:
            for index, rep in enumerate(representatives):
                if self.comparator.are_identical(file.path, rep.path, file.size, rep.size):
                    clusters[index].append(file)
                    break
            else:
                representatives.append(file)
                clusters.append([file])

        return clusters

    @staticmethod
    def _group_by(files: List[SourceFile], key_func: Callable[[SourceFile], Any]) -> Dict[Any, List[SourceFile]]:
        """
        Helper method to group files by any computed key.
        Errors from key_func propagate: a partial grouping is never returned.
        Args:
            files: List of files to group
            key_func: Function that computes a hashable key from a SourceFile
        Returns:
            Dict[key, List[SourceFile]] in first-seen key order, members in input order
        """
        groups = defaultdict(list)
        for file in files:
            groups[key_func(file)].append(file)
        return dict(groups)

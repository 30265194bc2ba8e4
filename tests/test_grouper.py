"""
Unit tests for FileGrouperImpl.
Verifies size/fingerprint grouping and representative-based content clustering.
"""
from mediaorganizer.core.grouper import FileGrouperImpl
from mediaorganizer.core.models import SourceFile


class RecordingComparator:
    """Fake equality engine: files are identical when their names share a first letter."""

    def __init__(self):
        self.calls = []

    def are_identical(self, path1, path2, size1=None, size2=None):
        self.calls.append((path1, path2))
        return path1[0] == path2[0]


def fake(path, size=10):
    return SourceFile(path=path, size=size)


class TestFileGrouper:
    """Grouping keeps singletons and input order."""

    def test_group_by_size(self):
        files = [fake("a", 1), fake("b", 2), fake("c", 1)]
        groups = FileGrouperImpl().group_by_size(files)
        assert list(groups) == [1, 2]
        assert [f.path for f in groups[1]] == ["a", "c"]
        assert [f.path for f in groups[2]] == ["b"]

    def test_group_by_header_hash(self, make_file):
        a = make_file("a.jpg", b"same")
        b = make_file("b.jpg", b"same")
        c = make_file("c.jpg", b"diff")
        files = [SourceFile(path=str(p), size=4) for p in (a, b, c)]

        groups = list(FileGrouperImpl().group_by_header_hash(files).values())

        assert [[f.path for f in g] for g in groups] == [[str(a), str(b)], [str(c)]]

    def test_cluster_compares_only_against_representatives(self):
        comparator = RecordingComparator()
        grouper = FileGrouperImpl(comparator=comparator)
        files = [fake("a1"), fake("b1"), fake("a2"), fake("b2"), fake("c1")]

        clusters = grouper.cluster_by_content(files)

        assert [[f.path for f in c] for c in clusters] == [["a1", "a2"], ["b1", "b2"], ["c1"]]
        # b1 vs a1; a2 vs a1; b2 vs a1, b1; c1 vs a1, b1
        assert comparator.calls == [
            ("b1", "a1"),
            ("a2", "a1"),
            ("b2", "a1"), ("b2", "b1"),
            ("c1", "a1"), ("c1", "b1"),
        ]

    def test_cluster_uses_real_engine_by_default(self, make_file):
        a = make_file("a.jpg", b"x" * 100)
        b = make_file("b.jpg", b"x" * 100)
        c = make_file("c.jpg", b"y" * 100)
        files = [SourceFile(path=str(p), size=100) for p in (a, b, c)]

        clusters = FileGrouperImpl().cluster_by_content(files)

        assert [len(c) for c in clusters] == [2, 1]

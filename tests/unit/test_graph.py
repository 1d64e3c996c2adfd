"""Tests for the dependency graph builder."""

import pytest

from infrastructure.composer import (
  DanglingReferenceError,
  DuplicateDeclarationError,
  InvalidInputError,
  Ref,
  build,
)
from infrastructure.composer import declarations as decl


@pytest.fixture
def declarations() -> list:
  """Bucket, identity and distribution linked by refs."""
  return [
    decl.identity("oai"),
    decl.storage_bucket("site", bucket_name="example.com", read_access=Ref("oai")),
    decl.cdn_distribution(
      "cdn",
      origin_bucket=Ref("site"),
      origin_identity=Ref("oai"),
      certificate="arn:aws:acm:us-east-1:123456789012:certificate/abc",
      aliases=["example.com"],
    ),
  ]


class TestBuild:
  """Test building graphs from declarations."""

  def test_infers_edges_from_refs(self, declarations: list) -> None:
    """Refs in config become dependency edges."""
    graph = build(declarations)

    assert graph.dependencies_of("site") == {"oai"}
    assert graph.dependencies_of("cdn") == {"site", "oai"}
    assert graph.dependencies_of("oai") == frozenset()

  def test_includes_explicit_dependencies(self) -> None:
    """Explicit depends_on names are edges too."""
    graph = build(
      [
        decl.storage_bucket("logs", bucket_name="logs.example.com"),
        decl.storage_bucket("site", bucket_name="example.com", depends_on=["logs"]),
      ]
    )

    assert graph.edges() == [("site", "logs")]

  def test_dependents(self, declarations: list) -> None:
    """Reverse edges are available."""
    graph = build(declarations)

    assert graph.dependents_of("oai") == {"site", "cdn"}
    assert graph.dependents_of("cdn") == frozenset()

  def test_container_protocol(self, declarations: list) -> None:
    """Graphs report their size and membership."""
    graph = build(declarations)

    assert len(graph) == 3
    assert "cdn" in graph
    assert "missing" not in graph
    assert graph.names() == ["cdn", "oai", "site"]
    assert [d.name for d in graph] == ["cdn", "oai", "site"]

  def test_dangling_ref(self) -> None:
    """A ref to a missing declaration fails."""
    with pytest.raises(DanglingReferenceError) as exc_info:
      build([decl.storage_bucket("site", bucket_name="example.com", read_access=Ref("oai"))])

    assert exc_info.value.source == "site"
    assert exc_info.value.target == "oai"

  def test_dangling_explicit_dependency(self) -> None:
    """An explicit dependency on a missing declaration fails."""
    with pytest.raises(DanglingReferenceError):
      build([decl.identity("oai", depends_on=["nothing"])])

  def test_duplicate_names(self) -> None:
    """Two declarations may not share a name."""
    with pytest.raises(DuplicateDeclarationError) as exc_info:
      build([decl.identity("oai"), decl.identity("oai", comment="again")])

    assert isinstance(exc_info.value, InvalidInputError)
    assert exc_info.value.name == "oai"

  def test_does_not_mutate_input(self, declarations: list) -> None:
    """The input collection is left as it was."""
    before = list(declarations)
    build(declarations)

    assert declarations == before

  def test_each_call_builds_a_new_graph(self, declarations: list) -> None:
    """Graphs are not shared between calls."""
    assert build(declarations) is not build(declarations)

  def test_accepts_a_set(self, declarations: list) -> None:
    """Declarations can be passed as a set."""
    assert len(build(set(declarations))) == 3

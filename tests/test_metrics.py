import pytest  # type: ignore[import-not-found]

from transnet.analytics.centrality import compute_metrics
from transnet.analytics.community import detect_communities
from transnet.analytics.metrics import MetricsFacade
from transnet.data.models import EntitySpec, Graph, NetworkConfig, TranslationRecord
from transnet.graph.builder import build_graph


def analysed(records, config=None) -> Graph:
    graph = build_graph(records, config or NetworkConfig())
    compute_metrics(graph)
    return detect_communities(graph, seed=0)


def scenario_facade() -> MetricsFacade:
    return MetricsFacade(
        analysed(
            [
                TranslationRecord(author="A", translator="T", publisher="P1"),
                TranslationRecord(author="A", translator="T", publisher="P2"),
                TranslationRecord(author="B", translator="T", publisher="P1"),
            ]
        )
    )


def test_density_and_average_degree():
    facade = scenario_facade()
    assert facade.density() == pytest.approx(7 / 20)
    assert facade.average_degree() == pytest.approx(7 / 5)


def test_node_and_edge_lists_expose_the_rendering_contract():
    facade = scenario_facade()
    node = facade.nodes()[0]
    edge = facade.edges()[0]

    assert set(node) == {
        "id",
        "name",
        "group",
        "degree",
        "inDegree",
        "outDegree",
        "closeness",
        "betweenness",
        "pageRank",
        "community",
    }
    assert set(edge) == {"source", "target", "weight", "type"}
    assert len(facade.nodes()) == 5
    assert len(facade.edges()) == 7


def test_top_ranks_by_metric_and_breaks_ties_by_id():
    facade = scenario_facade()
    assert facade.top("degree", 1)[0]["id"] == "translator:T"
    # author:A and publisher:P1 both have degree 4
    assert [item["id"] for item in facade.top("degree", 3)] == [
        "translator:T",
        "author:A",
        "publisher:P1",
    ]
    assert facade.top("pageRank", 0) == []
    assert [item["id"] for item in facade.top("degree", 5, group="author")] == [
        "author:A",
        "author:B",
    ]


def test_top_rejects_unknown_metrics():
    with pytest.raises(ValueError):
        scenario_facade().top("eigenvector")


def test_summary_reports_structure():
    config = NetworkConfig(
        entity_specs=[EntitySpec.parse(key) for key in ("author", "translator", "publisher", "city")]
    )
    records = [
        TranslationRecord(author="A", translator="T", publisher="P", city="Lisbon"),
        TranslationRecord(author="Lonely"),
    ]
    summary = MetricsFacade(analysed(records, config)).summary(top_k=3)

    assert summary["node_count"] == 5
    assert summary["edge_count"] == 6
    assert summary["clustering_coefficient"] == pytest.approx(1.0)
    assert summary["diameter_estimate"] == 1
    assert summary["connected_components"] == 2
    assert summary["largest_component_size"] == 4
    assert summary["isolated_nodes"] == 1
    assert summary["group_counts"] == {"author": 2, "translator": 1, "publisher": 1, "city": 1}
    assert summary["edge_type_counts"]["translation"] == 1
    assert summary["edge_type_counts"]["publication"] == 3
    assert summary["edge_type_counts"]["geographic"] == 2
    assert 2 <= summary["community_count"] <= 5
    assert len(summary["top_page_rank"]) == 3
    assert summary["most_productive_translators"][0]["id"] == "translator:T"
    assert [item["id"] for item in summary["most_translated_authors"]] == [
        "author:A",
        "author:Lonely",
    ]


def test_summary_of_path_graph_measures_diameter():
    records = [
        TranslationRecord(author="A", translator="T"),
        TranslationRecord(translator="T", publisher="P"),
    ]
    summary = MetricsFacade(analysed(records)).summary()
    assert summary["diameter_estimate"] == 2
    assert summary["clustering_coefficient"] == 0.0


def test_empty_graph_summary_is_well_defined():
    facade = MetricsFacade(analysed([]))
    summary = facade.summary()

    assert facade.density() == 0.0
    assert facade.average_degree() == 0.0
    assert summary["node_count"] == 0
    assert summary["community_count"] == 0
    assert summary["diameter_estimate"] == 0
    assert summary["median_degree"] == 0.0
    assert summary["top_betweenness"] == []

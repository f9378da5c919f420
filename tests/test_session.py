from transnet.analytics.metrics import MetricsFacade
from transnet.data.models import AnalysisConfig, Graph, NetworkConfig, TranslationRecord
from transnet.pipelines.session import AnalysisSession


def sample_records():
    return [
        TranslationRecord(author="A", translator="T", publisher="P1"),
        TranslationRecord(author="B", translator="T", publisher="P1"),
    ]


def test_recompute_commits_latest_generation():
    session = AnalysisSession(NetworkConfig(), AnalysisConfig(seed=1))
    facade = session.recompute(sample_records())

    assert facade is not None
    assert session.current is facade
    assert session.committed_generation == session.generation == 1
    assert facade.graph.nodes["translator:T"].metrics.degree == 4


def test_stale_tokens_cannot_commit():
    session = AnalysisSession()
    stale = session.begin()
    fresh = session.begin()
    facade = MetricsFacade(Graph())

    assert session.commit(stale, facade) is False
    assert session.current is None
    assert session.commit(fresh, facade) is True
    assert session.current is facade


def test_superseded_recompute_is_discarded():
    session = AnalysisSession(analysis_config=AnalysisConfig(seed=1))
    first = session.recompute(sample_records())

    def records_then_new_generation():
        yield from sample_records()
        session.begin()

    assert session.recompute(records_then_new_generation()) is None
    assert session.current is first
    assert session.committed_generation == 1
    assert session.generation == 3

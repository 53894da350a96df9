"""Tests for the per-test generation orchestrator."""

import pytest

from autotestgen.application.generate_usecase import GenerateUseCase, parse_test_names
from autotestgen.domain.models import GeneratedTest
from autotestgen.ports.codegen_error import ConfigurationError, ExtractionError, TransportError

SOURCE = "def div_u32(a, b):\n    return a // b"


class FakeBackend:
    """In-memory backend recording the session it was given."""

    def __init__(self, outcome):
        self.outcome = outcome
        self.system_prompt = None
        self.context: list[str] = []
        self.generate_calls = 0

    def initialize(self, system_prompt: str) -> None:
        self.system_prompt = system_prompt

    def add_context(self, text: str) -> None:
        self.context.append(text)

    def generate(self) -> str:
        self.generate_calls += 1
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return self.outcome


class FakeFactory:
    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.created: list[FakeBackend] = []

    def __call__(self) -> FakeBackend:
        backend = FakeBackend(self.outcomes[len(self.created)])
        self.created.append(backend)
        return backend


class TestParseTestNames:
    """Test parsing the requested test list."""

    def test_comma_separated(self):
        assert parse_test_names("test_valid, test_div_by_zero") == ["test_valid", "test_div_by_zero"]

    def test_duplicates_and_blanks_dropped(self):
        assert parse_test_names("test_a,,test_b, test_a ,") == ["test_a", "test_b"]

    def test_accepts_iterables(self):
        assert parse_test_names(["test_a", " test_b "]) == ["test_a", "test_b"]

    @pytest.mark.parametrize("text", ["test a", "1test", "test-dash"])
    def test_invalid_identifier(self, text):
        with pytest.raises(ValueError, match="Invalid test name"):
            parse_test_names(text)


class TestGenerateUseCase:
    """Test session orchestration."""

    def test_one_fresh_session_per_test(self):
        factory = FakeFactory(["def test_valid(): ...", "def test_div_by_zero(): ..."])
        usecase = GenerateUseCase(factory)

        results = usecase.generate_tests(SOURCE, ["test_valid", "test_div_by_zero"])

        assert [r.test_name for r in results] == ["test_valid", "test_div_by_zero"]
        assert [r.code for r in results] == ["def test_valid(): ...", "def test_div_by_zero(): ..."]
        assert all(r.success for r in results)
        assert len(factory.created) == 2
        assert all(b.generate_calls == 1 for b in factory.created)

    def test_session_is_primed_with_prompt_source_and_name(self):
        factory = FakeFactory(["code"])

        GenerateUseCase(factory, language="python").generate_tests(SOURCE, ["test_valid"])

        backend = factory.created[0]
        assert "```python" in backend.system_prompt
        assert len(backend.context) == 2
        assert SOURCE in backend.context[0]
        assert "test_valid" in backend.context[1]

    def test_failure_is_isolated_to_its_test(self):
        factory = FakeFactory(
            [
                ExtractionError("no code block start found", raw="no code"),
                "def test_b(): ...",
                TransportError("connection refused"),
            ]
        )

        results = GenerateUseCase(factory).generate_tests(SOURCE, ["test_a", "test_b", "test_c"])

        assert [r.success for r in results] == [False, True, False]
        assert "no code block start found" in results[0].error_message
        assert results[1].code == "def test_b(): ..."
        assert "connection refused" in results[2].error_message

    def test_configuration_error_aborts_run(self):
        factory = FakeFactory([ConfigurationError("API credential not found"), "unused"])

        with pytest.raises(ConfigurationError):
            GenerateUseCase(factory).generate_tests(SOURCE, ["test_a", "test_b"])
        assert len(factory.created) == 1

    def test_generate_test_propagates_errors(self):
        factory = FakeFactory([ExtractionError("no code block end found")])

        with pytest.raises(ExtractionError):
            GenerateUseCase(factory).generate_test(SOURCE, "test_a")


class TestGeneratedTest:
    """Test the result model."""

    def test_requires_exactly_one_outcome(self):
        with pytest.raises(ValueError):
            GeneratedTest(test_name="test_a")
        with pytest.raises(ValueError):
            GeneratedTest(test_name="test_a", code="x", error_message="y")

    def test_success_flag(self):
        assert GeneratedTest(test_name="t", code="pass").success
        assert not GeneratedTest(test_name="t", error_message="boom").success

"""Unit tests for modorder.models.constraint module."""

from __future__ import annotations

import pytest

from modorder.models.constraint import Constraint, Operator


@pytest.mark.unit
class TestOperator:
    """Tests for Operator.from_symbol."""

    @pytest.mark.parametrize("symbol", [">=", "<=", ">", "<", "==", "!="])
    def test_known_symbols(self, symbol: str) -> None:
        assert Operator.from_symbol(symbol).value == symbol

    @pytest.mark.parametrize("symbol", [None, "", "=>", "~="])
    def test_unknown_symbols(self, symbol) -> None:
        assert Operator.from_symbol(symbol) is Operator.NONE


@pytest.mark.unit
class TestConstraintInit:
    """Tests for construction and degradation."""

    def test_target_normalized(self) -> None:
        assert Constraint(" Core ").target_id == "core"

    def test_operator_without_version_degrades(self) -> None:
        constraint = Constraint("core", Operator.GE)

        assert constraint.operator is Operator.NONE
        assert constraint.version is None

    def test_version_without_operator_degrades(self) -> None:
        constraint = Constraint("core", Operator.NONE, "1.0")

        assert constraint.version is None

    def test_malformed_version_degrades(self) -> None:
        constraint = Constraint("core", Operator.EQ, "1.0-beta")

        assert not constraint.is_versioned
        assert constraint.version is None

    def test_version_trimmed(self) -> None:
        assert Constraint("core", Operator.EQ, " 1.0 ").version == "1.0"


@pytest.mark.unit
class TestIsSatisfiedBy:
    """Tests for Constraint.is_satisfied_by."""

    def test_unversioned_accepts_anything(self) -> None:
        constraint = Constraint("core")

        assert constraint.is_satisfied_by(None)
        assert constraint.is_satisfied_by("garbage")

    @pytest.mark.parametrize(
        "operator,required,candidate,expected",
        [
            (Operator.GE, "1.2", "1.10", True),
            (Operator.GE, "1.2", "1.2.0", True),
            (Operator.GE, "1.2", "1.1.9", False),
            (Operator.LE, "2.0", "2.0.0.0", True),
            (Operator.LE, "2.0", "2.0.1", False),
            (Operator.GT, "1.0", "1.0.0.1", True),
            (Operator.GT, "1.0", "1.0", False),
            (Operator.LT, "1.0", "0.9", True),
            (Operator.LT, "1.0", "1.0", False),
            (Operator.EQ, "1.2", "1.2.0.0", True),
            (Operator.EQ, "1.2", "1.2.1", False),
            (Operator.NE, "1.2", "1.3", True),
            (Operator.NE, "1.2", "1.2.0", False),
        ],
    )
    def test_comparisons(
        self,
        operator: Operator,
        required: str,
        candidate: str,
        expected: bool,
    ) -> None:
        assert Constraint("core", operator, required).is_satisfied_by(candidate) is expected

    @pytest.mark.parametrize("candidate", [None, "", "beta", "1", "1.0-rc1"])
    def test_unusable_candidate_rejected(self, candidate) -> None:
        assert Constraint("core", Operator.GE, "1.0").is_satisfied_by(candidate) is False


@pytest.mark.unit
class TestRendering:
    """Tests for to_spec and __str__."""

    def test_versioned(self) -> None:
        constraint = Constraint("core", Operator.NE, "2.0")

        assert constraint.to_spec() == "!=2.0"
        assert str(constraint) == "core!=2.0"

    def test_unversioned(self) -> None:
        assert str(Constraint("core")) == "core"

import dataclasses

import pytest

from dqprofile.config import DEFAULT_CONFIG, QualityConfig, QualityThresholds, ScoreWeights
from dqprofile.inference import DataType
from dqprofile.issues import IssueType, Severity, detect_issues
from dqprofile.profiling import ColumnProfile
from dqprofile.scoring import (
    accuracy_score,
    completeness_score,
    compute_scores,
    consistency_score,
    overall_score,
    round_half_up,
    validity_score,
)


def make_profile(
    name="col", data_type=DataType.TEXT, total=100, non_null=100,
    unique=100, outliers=0, duplicates=0,
):
    """Build a ColumnProfile with derived percentages filled in."""
    null = total - non_null
    return ColumnProfile(
        name=name,
        data_type=data_type,
        total_count=total,
        non_null_count=non_null,
        null_count=null,
        null_percentage=100 * null / total if total else 0.0,
        unique_count=unique,
        uniqueness=100 * unique / non_null if non_null else 0.0,
        outliers=outliers,
        duplicates=duplicates,
    )


def metrics(*profiles):
    return {p.name: p for p in profiles}


class TestRounding:
    def test_half_up(self):
        assert round_half_up(62.5) == 63
        assert round_half_up(0.5) == 1
        assert round_half_up(62.49) == 62


class TestNoColumns:
    def test_all_zero(self):
        card = compute_scores({})
        assert (card.overall, card.completeness, card.consistency, card.accuracy, card.validity) == (0, 0, 0, 0, 0)


class TestCompleteness:
    def test_average_null_percentage(self):
        m = metrics(
            make_profile("a", non_null=100),
            make_profile("b", non_null=50, unique=50),
        )
        assert completeness_score(m) == 75

    def test_fully_missing(self):
        m = metrics(make_profile("a", non_null=0, unique=0, data_type=DataType.UNKNOWN))
        assert completeness_score(m) == 0


class TestConsistency:
    def test_high_null_penalty(self):
        m = metrics(make_profile(non_null=40, unique=40))
        assert consistency_score(m) == 90

    def test_low_uniqueness_penalty(self):
        m = metrics(make_profile(unique=5))
        assert consistency_score(m) == 95

    def test_booleans_are_exempt_from_uniqueness(self):
        m = metrics(make_profile(unique=2, data_type=DataType.BOOLEAN))
        assert consistency_score(m) == 100

    def test_penalties_add_up_across_columns(self):
        m = metrics(*[make_profile(f"c{i}", non_null=10, unique=1) for i in range(5)])
        # 90% null each; uniqueness of exactly 10% is not penalised
        assert consistency_score(m) == 50

    def test_clamped_at_zero(self):
        m = metrics(*[make_profile(f"c{i}", non_null=10, unique=0) for i in range(10)])
        assert consistency_score(m) == 0


class TestAccuracy:
    def test_high_outlier_ratio(self):
        m = metrics(make_profile(data_type=DataType.NUMBER, outliers=11))
        assert accuracy_score(m) == 85

    def test_moderate_outlier_ratio(self):
        m = metrics(make_profile(data_type=DataType.NUMBER, outliers=6))
        assert accuracy_score(m) == 95

    def test_outliers_at_threshold_not_penalised(self):
        m = metrics(make_profile(data_type=DataType.NUMBER, outliers=5))
        assert accuracy_score(m) == 100

    def test_duplicate_ratio(self):
        m = metrics(make_profile(duplicates=21))
        assert accuracy_score(m) == 90

    def test_both_penalties_same_column(self):
        m = metrics(make_profile(data_type=DataType.NUMBER, outliers=20, duplicates=30))
        assert accuracy_score(m) == 75

    def test_no_non_null_values(self):
        m = metrics(make_profile(non_null=0, unique=0, data_type=DataType.UNKNOWN))
        assert accuracy_score(m) == 100


class TestValidity:
    def test_unknown_penalty(self):
        m = metrics(
            make_profile("a", non_null=0, unique=0, data_type=DataType.UNKNOWN),
            make_profile("b"),
        )
        assert validity_score(m) == 90


class TestOverall:
    def test_weights(self):
        assert overall_score(100, 100, 100, 100) == 100
        assert overall_score(89, 100, 100, 100) == 97
        assert overall_score(0, 0, 0, 0) == 0

    def test_custom_weights(self):
        w = ScoreWeights(completeness=1.0, consistency=0.0, accuracy=0.0, validity=0.0)
        assert overall_score(42, 100, 100, 100, w) == 42


# ─────────────────────────── issues ───────────────────────────

class TestIssues:
    def test_missing_values_medium(self):
        issues = detect_issues(metrics(make_profile("a", non_null=70, unique=70)))
        assert len(issues) == 1
        assert issues[0].type is IssueType.MISSING_VALUES
        assert issues[0].severity is Severity.MEDIUM
        assert issues[0].message == '30.0% of values are missing in "a"'

    def test_missing_values_high(self):
        issues = detect_issues(metrics(make_profile("a", non_null=40, unique=40)))
        assert issues[0].severity is Severity.HIGH

    def test_missing_values_at_threshold(self):
        assert detect_issues(metrics(make_profile("a", non_null=80, unique=80))) == []

    def test_outliers(self):
        issues = detect_issues(metrics(make_profile("n", data_type=DataType.NUMBER, outliers=6)))
        assert [i.type for i in issues] == [IssueType.OUTLIERS]
        assert issues[0].message == '6 outliers detected in "n"'

    def test_duplicates(self):
        issues = detect_issues(metrics(make_profile("d", duplicates=11)))
        assert [i.type for i in issues] == [IssueType.DUPLICATES]
        assert issues[0].message == '11 duplicate values found in "d"'

    def test_low_uniqueness(self):
        issues = detect_issues(metrics(make_profile("u", unique=4)))
        assert [i.type for i in issues] == [IssueType.LOW_UNIQUENESS]
        assert issues[0].severity is Severity.LOW
        assert issues[0].message == 'Low uniqueness (4.0%) in "u"'

    def test_boolean_low_uniqueness_ignored(self):
        assert detect_issues(metrics(make_profile("b", unique=2, data_type=DataType.BOOLEAN))) == []

    def test_rule_and_column_order(self):
        m = metrics(
            make_profile("x", non_null=40, unique=1, duplicates=60),
            make_profile("y", data_type=DataType.NUMBER, outliers=10),
        )
        issues = detect_issues(m)
        assert [(i.column, i.type) for i in issues] == [
            ("x", IssueType.MISSING_VALUES),
            ("x", IssueType.DUPLICATES),
            ("x", IssueType.LOW_UNIQUENESS),
            ("y", IssueType.OUTLIERS),
        ]

    def test_custom_thresholds(self):
        config = QualityConfig(thresholds=QualityThresholds(missing_values_pct=40.0))
        m = metrics(make_profile("a", non_null=70, unique=70))
        assert detect_issues(m, config) == []
        assert len(detect_issues(m, DEFAULT_CONFIG)) == 1

    def test_to_dict(self):
        issue = detect_issues(metrics(make_profile("u", unique=4)))[0]
        assert issue.to_dict() == {
            "type": "low_uniqueness",
            "severity": "low",
            "column": "u",
            "message": 'Low uniqueness (4.0%) in "u"',
        }


def test_config_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_CONFIG.weights.completeness = 1.0

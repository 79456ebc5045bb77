import pytest

from backend.risk.reference import (
    AGE_BASELINES,
    FALLBACK_BASELINE,
    CRITICAL_COMBINATIONS,
    HIGH_RISK_SYMPTOMS,
    MODERATE_LOW_RISK_SYMPTOMS,
)
from backend.risk.scorer import (
    age_baseline,
    calculate,
    clamp_risk,
    classify_label,
    critical_combination_risk,
    dose_multiplier,
    duration_multiplier,
    has_high_severity_symptom,
    resolve_age_bracket,
    resolve_duration_category,
    symptom_load,
    to_percentage,
)


@pytest.mark.parametrize(
    ("age", "bracket", "baseline"),
    [
        (30, "16-18", 0.14),
        (16, "16-18", 0.14),
        (15.9, "13-15", 0.325),
        (13, "13-15", 0.325),
        (12, "10-12", 0.535),
        (10, "10-12", 0.535),
        (9, "7-9", 0.69),
        (7, "7-9", 0.69),
        (6, "4-6", 0.85),
        (4, "4-6", 0.85),
        (3, "1-3", 0.94),
        (0.5, "1-3", 0.94),
        (None, "7-9", 0.69),
        (0, "7-9", 0.69),
    ],
)
def test_age_bracket_selects_highest_threshold_met(age, bracket, baseline) -> None:
    assert resolve_age_bracket(age) == bracket
    result = calculate(age, "4mg", 2, [], False)
    assert result.details.base == baseline


def test_negative_age_passes_through_to_youngest_bracket() -> None:
    assert resolve_age_bracket(-2) == "1-3"
    assert resolve_age_bracket(float("nan")) == "7-9"


def test_dose_multiplier_defaults_to_neutral_for_unknown_dose() -> None:
    assert dose_multiplier("4mg") == 1.0
    assert dose_multiplier("5mg") == 1.1
    assert dose_multiplier("10mg") == 1.25
    assert dose_multiplier("20mg") == 1.0
    assert dose_multiplier(None) == 1.0


def test_unknown_dose_scores_like_4mg() -> None:
    assert calculate(17, "20mg", 2, [], False) == calculate(17, "4mg", 2, [], False)


@pytest.mark.parametrize(
    ("weeks", "category"),
    [
        (None, "medium"),
        ("", "medium"),
        ("abc", "medium"),
        (float("nan"), "medium"),
        (-1, "short"),
        (0, "short"),
        (3.9, "short"),
        (4, "medium"),
        (24, "medium"),
        (24.5, "long"),
        (52, "long"),
    ],
)
def test_duration_category_uses_week_thresholds(weeks, category) -> None:
    assert resolve_duration_category(weeks) == category


def test_duration_multipliers() -> None:
    assert duration_multiplier("short") == 1.0
    assert duration_multiplier("medium") == 1.1
    assert duration_multiplier("long") == 1.2


def test_duration_multiplier_defaults_to_neutral_for_unknown_category() -> None:
    assert duration_multiplier("bogus") == 1.0  # type: ignore[arg-type]


def test_age_baseline_falls_back_for_unmapped_bracket() -> None:
    assert age_baseline("7-9") == 0.69
    assert age_baseline("19-21") == FALLBACK_BASELINE
    assert FALLBACK_BASELINE == 0.14


@pytest.mark.parametrize(
    ("count", "category", "adder"),
    [
        (0, "Low", 0.0),
        (1, "Low", 0.05),
        (2, "Moderate", 0.10),
        (3, "Moderate", 0.10),
        (4, "High", 0.25),
        (9, "High", 0.25),
    ],
)
def test_symptom_load_is_step_function_of_count(count, category, adder) -> None:
    assert symptom_load(count) == (category, adder)


def test_duplicate_symptoms_count_toward_load() -> None:
    result = calculate(17, "4mg", 2, ["Anxiety", "Anxiety"], False)
    assert result.details.symptom_cat == "Moderate"
    assert result.percentage == 24
    assert result.label == "Low Risk"


def test_four_moderate_symptoms_reach_moderate_label() -> None:
    result = calculate(17, "4mg", 2, ["Anxiety", "Fatigue", "Nightmares", "Irritability"], False)
    assert result.details.symptom_cat == "High"
    assert result.details.has_high_severity is False
    assert result.percentage == 39
    assert result.label == "Moderate Risk"


def test_high_severity_symptom_forces_floor_and_category() -> None:
    result = calculate(17, "4mg", 2, ["Suicide attempt"], False)
    assert result.details.has_high_severity is True
    assert result.details.symptom_cat == "High (Severity)"
    assert result.percentage == 75
    assert result.label == "High Risk"


def test_high_severity_floor_applies_before_temporal_boost() -> None:
    result = calculate(17, "4mg", 2, ["Severe depression"], True)
    assert result.percentage == 86


def test_severity_check_is_exact_match() -> None:
    assert has_high_severity_symptom(["Severe depression"]) is True
    assert has_high_severity_symptom(["severe depression"]) is False
    assert has_high_severity_symptom(["Depression (mild-moderate)"]) is False


def test_worked_example_school_age_with_temporal_association() -> None:
    result = calculate(8, "5mg", 12, [], True)
    assert result.details.base == 0.69
    assert result.details.symptom_cat == "Low"
    assert result.details.has_high_severity is False
    assert result.details.is_critical_combo is False
    assert result.percentage == 96
    assert result.label == "High Risk"


def test_worked_example_adolescent_single_mild_symptom() -> None:
    result = calculate(17, "4mg", 2, ["Anxiety"], False)
    assert result.details.base == 0.14
    assert result.details.symptom_cat == "Low"
    assert result.percentage == 19
    assert result.label == "Low Risk"


def test_moderate_band_for_preteen_baseline() -> None:
    result = calculate(11, "4mg", 1, [], False)
    assert result.percentage == 54
    assert result.label == "Moderate Risk"


def test_critical_combination_overrides_arithmetic() -> None:
    result = calculate(17, "4mg", 2, [], False, "Almont", ["Levocetirizine"])
    assert result.percentage == 96
    assert result.label == "High Risk"
    assert result.details.is_critical_combo is True
    assert result.details.symptom_cat == "Low"


def test_critical_combination_still_reports_symptom_details() -> None:
    result = calculate(2, "10mg", 52, ["Psychosis / hallucinations"], True, "Almont", ["Fexofenadine", "Levocetirizine"])
    assert result.percentage == 96
    assert result.details.is_critical_combo is True
    assert result.details.has_high_severity is True
    assert result.details.symptom_cat == "High (Severity)"


def test_critical_combination_requires_both_brand_and_drug() -> None:
    assert critical_combination_risk("Almont", ["Cetirizine"]) is None
    assert critical_combination_risk("Singulair", ["Levocetirizine"]) is None
    assert critical_combination_risk("Almont", None) is None
    assert critical_combination_risk(None, ["Levocetirizine"]) is None
    assert critical_combination_risk("Almont", ["Levocetirizine"]) == 0.96
    result = calculate(17, "4mg", 2, [], False, "Singulair", ["Levocetirizine"])
    assert result.details.is_critical_combo is False
    assert result.percentage == 14


def test_result_is_clamped_to_ceiling() -> None:
    result = calculate(2, "10mg", 52, ["Anxiety", "Fatigue", "Nightmares", "Irritability"], True)
    assert result.percentage == 99
    assert result.label == "High Risk"


def test_clamp_bounds() -> None:
    assert clamp_risk(0.01) == 0.05
    assert clamp_risk(1.5) == 0.99
    assert clamp_risk(0.42) == 0.42


@pytest.mark.parametrize(
    ("risk", "label"),
    [
        (0.99, "High Risk"),
        (0.70, "High Risk"),
        (0.6999, "Moderate Risk"),
        (0.30, "Moderate Risk"),
        (0.2999, "Low Risk"),
        (0.05, "Low Risk"),
    ],
)
def test_label_cut_points_apply_to_fraction(risk, label) -> None:
    assert classify_label(risk) == label


def test_percentage_rounds_half_up() -> None:
    assert to_percentage(0.125) == 13
    assert to_percentage(0.19) == 19
    assert to_percentage(0.960135) == 96


def test_percentage_always_within_clamped_range() -> None:
    ages = [None, 0, 1, 5, 8, 11, 14, 17, 40, -3]
    doses = ["4mg", "5mg", "10mg", "bogus"]
    durations = [None, 0, 10, 30]
    symptom_sets = [[], ["Anxiety"], ["Suicide attempt", "Fatigue", "Nightmares", "Anxiety", "Irritability"]]
    for age in ages:
        for dose in doses:
            for weeks in durations:
                for symptoms in symptom_sets:
                    for temporal in (False, True):
                        result = calculate(age, dose, weeks, symptoms, temporal)
                        assert 5 <= result.percentage <= 99


def test_calculate_is_idempotent() -> None:
    args = (8, "5mg", 12, ["Anxiety", "Extreme mood swings"], True, "Almont", ["Montelukast"])
    assert calculate(*args) == calculate(*args)


def test_calculate_accepts_tuple_and_missing_combo_drugs() -> None:
    result = calculate(17, "4mg", 2, ("Anxiety",), False, "Almont")
    assert result.percentage == 19
    assert result.details.is_critical_combo is False


def test_reference_tables_are_immutable_and_catalogs_disjoint() -> None:
    with pytest.raises(TypeError):
        AGE_BASELINES["1-3"] = 0.5  # type: ignore[index]
    with pytest.raises(TypeError):
        CRITICAL_COMBINATIONS[("Singulair", "Cetirizine")] = 0.9  # type: ignore[index]
    assert len(HIGH_RISK_SYMPTOMS) == 11
    assert len(MODERATE_LOW_RISK_SYMPTOMS) == 17
    assert HIGH_RISK_SYMPTOMS.isdisjoint(MODERATE_LOW_RISK_SYMPTOMS)

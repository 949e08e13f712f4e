import pytest

from tempo.core.errors import InvalidArgument
from tempo.core.hr_zones import calculate_zones_from_age, calculate_zones_from_karvonen
from tempo.models.workout import Workout
from tempo.schemas.hr_zones import (
    HeartRateZone,
    HeartRateZonesUpdate,
    HeartRateZonesUpdateWithRecalc,
)
from tempo.services import zone_settings
from tempo.services.settings_store import SettingsSlot
from tempo.services.zone_settings import (
    read_zones,
    update_zones,
    update_zones_and_recalculate,
)

CUSTOM = [
    {"min_bpm": 100, "max_bpm": 120},
    {"min_bpm": 120, "max_bpm": 140},
    {"min_bpm": 140, "max_bpm": 160},
    {"min_bpm": 160, "max_bpm": 175},
    {"min_bpm": 175, "max_bpm": 190},
]


def constant_score(workout, zones):
    return 50


def test_read_defaults_without_writing(db):
    first = read_zones(db)
    second = read_zones(db)

    assert first == second
    assert first.calculation_method == "AgeBased"
    assert first.age == 30
    assert first.max_heart_rate_bpm == 190
    assert first.resting_heart_rate_bpm is None
    assert first.zones == calculate_zones_from_age(30)
    assert SettingsSlot(db).get() is None


def test_read_is_idempotent_after_update(db):
    update_zones(db, HeartRateZonesUpdate(calculation_method="Karvonen", max_heart_rate_bpm=185, resting_heart_rate_bpm=50))
    assert read_zones(db) == read_zones(db)


def test_first_time_setup_only_once(db):
    r1 = update_zones(db, HeartRateZonesUpdate(calculation_method="AgeBased", age=35))
    r2 = update_zones(db, HeartRateZonesUpdate(calculation_method="Karvonen", max_heart_rate_bpm=185, resting_heart_rate_bpm=50))
    r3 = update_zones(db, HeartRateZonesUpdate(calculation_method="Custom", zones=CUSTOM))
    r4 = update_zones(db, HeartRateZonesUpdate(calculation_method="AgeBased", age=35))

    assert [r.is_first_time_setup for r in (r1, r2, r3, r4)] == [True, False, False, False]


def test_update_persists_zones_and_method(db):
    result = update_zones(db, HeartRateZonesUpdate(calculation_method="karvonen", max_heart_rate_bpm=190, resting_heart_rate_bpm=60))

    assert result.calculation_method == "Karvonen"
    assert result.zones == calculate_zones_from_karvonen(190, 60)

    stored = read_zones(db)
    assert stored.calculation_method == "Karvonen"
    assert stored.max_heart_rate_bpm == 190
    assert stored.resting_heart_rate_bpm == 60
    assert stored.zones == result.zones
    assert SettingsSlot(db).get().updated_at is not None


def test_update_keeps_irrelevant_fields_verbatim(db):
    result = update_zones(db, HeartRateZonesUpdate(calculation_method="Custom", age=44, resting_heart_rate_bpm=48, zones=CUSTOM))

    assert result.age == 44
    assert result.resting_heart_rate_bpm == 48
    assert [(z.zone_number, z.min_bpm, z.max_bpm) for z in result.zones] == [
        (i + 1, z["min_bpm"], z["max_bpm"]) for i, z in enumerate(CUSTOM)
    ]
    assert read_zones(db).age == 44


def test_update_mutates_the_same_record(db):
    update_zones(db, HeartRateZonesUpdate(calculation_method="AgeBased", age=30))
    first = SettingsSlot(db).get()
    created_at = first.created_at

    update_zones(db, HeartRateZonesUpdate(calculation_method="AgeBased", age=50))

    again = SettingsSlot(db).get()
    assert again.id == first.id
    assert again.created_at == created_at
    assert again.age == 50
    assert again.max_heart_rate_bpm is None


@pytest.mark.parametrize(
    "payload,message",
    [
        ({"calculation_method": "Lactate", "age": 30}, "Invalid calculation method"),
        ({"calculation_method": ""}, "Invalid calculation method"),
        ({"calculation_method": "AgeBased"}, "Age is required for AgeBased calculation method"),
        (
            {"calculation_method": "Karvonen", "resting_heart_rate_bpm": 55},
            "Max heart rate and resting heart rate are required for Karvonen calculation method",
        ),
        ({"calculation_method": "Custom", "zones": CUSTOM[:4]}, "Exactly 5 zones are required for Custom method"),
        ({"calculation_method": "Custom"}, "Exactly 5 zones are required for Custom method"),
        (
            {"calculation_method": "Karvonen", "max_heart_rate_bpm": 60, "resting_heart_rate_bpm": 70},
            "Max heart rate must be greater than resting heart rate",
        ),
    ],
)
def test_invalid_input_writes_nothing(db, payload, message):
    with pytest.raises(InvalidArgument) as err:
        update_zones(db, HeartRateZonesUpdate(**payload))

    assert str(err.value) == message
    assert SettingsSlot(db).get() is None


def test_invalid_custom_zones_keep_previous_settings(db):
    update_zones(db, HeartRateZonesUpdate(calculation_method="AgeBased", age=30))
    bad = [dict(z) for z in CUSTOM]
    bad[3] = {"min_bpm": 170, "max_bpm": 165}

    with pytest.raises(InvalidArgument, match="Zone 4"):
        update_zones(db, HeartRateZonesUpdate(calculation_method="Custom", zones=bad))

    assert read_zones(db).zones == calculate_zones_from_age(30)


def test_recalc_not_requested(db, make_workout):
    w = make_workout(avg_heart_rate_bpm=140, relative_effort=3)

    result = update_zones_and_recalculate(
        db,
        HeartRateZonesUpdateWithRecalc(calculation_method="AgeBased", age=30, recalculate_existing=False),
        constant_score,
    )

    assert result.is_first_time_setup is True
    assert result.recalculated_count is None
    assert result.recalculated_error_count is None
    db.expire_all()
    assert db.get(Workout, w.id).relative_effort == 3


def test_recalc_requested(db, make_workout):
    ok = make_workout(avg_heart_rate_bpm=140)
    bad = make_workout(avg_heart_rate_bpm=150)

    def score(workout, zones):
        if workout.id == bad.id:
            raise ValueError("no samples")
        return 50

    result = update_zones_and_recalculate(
        db,
        HeartRateZonesUpdateWithRecalc(calculation_method="AgeBased", age=30, recalculate_existing=True),
        score,
    )

    assert result.recalculated_count == 1
    assert result.recalculated_error_count == 1
    db.expire_all()
    assert db.get(Workout, ok.id).relative_effort == 50


def test_recalc_with_no_workouts_reports_zero(db):
    result = update_zones_and_recalculate(
        db,
        HeartRateZonesUpdateWithRecalc(calculation_method="AgeBased", age=30, recalculate_existing=True),
        constant_score,
    )
    assert result.recalculated_count == 0
    assert result.recalculated_error_count == 0


def test_recalc_failure_keeps_settings(db, make_workout, monkeypatch):
    make_workout(avg_heart_rate_bpm=140)

    def exploding(db, zones, score):
        raise RuntimeError("recalculation crashed")

    monkeypatch.setattr(zone_settings, "recalculate_all", exploding)

    result = update_zones_and_recalculate(
        db,
        HeartRateZonesUpdateWithRecalc(
            calculation_method="Karvonen",
            max_heart_rate_bpm=190,
            resting_heart_rate_bpm=60,
            recalculate_existing=True,
        ),
        constant_score,
    )

    assert result.is_first_time_setup is True
    assert result.recalculated_count is None
    assert result.recalculated_error_count is None
    stored = read_zones(db)
    assert stored.calculation_method == "Karvonen"
    assert stored.zones == calculate_zones_from_karvonen(190, 60)


def test_recalc_skipped_on_invalid_input(db, monkeypatch):
    def must_not_run(db, zones, score):
        raise AssertionError("recalculation should not run")

    monkeypatch.setattr(zone_settings, "recalculate_all", must_not_run)
    with pytest.raises(InvalidArgument):
        update_zones_and_recalculate(
            db,
            HeartRateZonesUpdateWithRecalc(calculation_method="AgeBased", recalculate_existing=True),
            constant_score,
        )


def test_custom_zone_input_accepts_models(db):
    zones = [HeartRateZone(**z) for z in CUSTOM]
    result = update_zones(db, HeartRateZonesUpdate(calculation_method="Custom", zones=zones))
    assert result.zones[-1].max_bpm == 190


def test_null_custom_zone_rejected(db):
    zones = [dict(z) for z in CUSTOM]
    zones[0] = None
    with pytest.raises(InvalidArgument, match="All zones must be defined"):
        update_zones(db, HeartRateZonesUpdate(calculation_method="Custom", zones=zones))
    assert SettingsSlot(db).get() is None


def test_missing_method_rejected(db):
    with pytest.raises(InvalidArgument, match="Invalid calculation method"):
        update_zones(db, HeartRateZonesUpdate(age=30))

"""Validator tests."""

from trip_workflow.config.settings import EditorSettings
from trip_workflow.domain.enums import ValidationStatus
from trip_workflow.domain.models import NodeMetadata, WorkflowDay, WorkflowNode
from trip_workflow.validators import count_by_status, validate_day, validate_days, validate_nodes


def _node(node_id: str, start: str = "09:00", minutes: int = 60, cost: float = 0, **meta) -> WorkflowNode:
    return WorkflowNode(
        id=node_id,
        title=node_id.upper(),
        start=start,
        duration_minutes=minutes,
        cost=cost,
        metadata=NodeMetadata(**meta),
    )


def _by_id(nodes):
    return {node.id: node for node in nodes}


def test_overlap_marks_both_nodes_as_error():
    """A 09:00+60 and B 09:30+30 overlap"""
    nodes = _by_id(validate_nodes([_node("a", "09:00", 60), _node("b", "09:30", 30)]))
    assert nodes["a"].validation.status == ValidationStatus.ERROR
    assert nodes["b"].validation.status == ValidationStatus.ERROR
    assert nodes["a"].validation.message == "Overlaps with B"
    assert nodes["b"].validation.message == "Overlaps with A"


def test_back_to_back_is_not_overlap():
    nodes = validate_nodes([_node("a", "09:00", 60), _node("b", "10:00", 30)])
    assert all(node.validation.status == ValidationStatus.VALID for node in nodes)
    assert all(node.validation.message is None for node in nodes)


def test_overlap_lists_every_colliding_title():
    nodes = _by_id(
        validate_nodes([_node("a", "09:00", 180), _node("b", "09:30", 30), _node("c", "11:00", 30)])
    )
    assert nodes["a"].validation.message == "Overlaps with B, C"
    assert nodes["b"].validation.message == "Overlaps with A"
    assert nodes["c"].validation.message == "Overlaps with A"


def test_open_hours_warning():
    nodes = validate_nodes([_node("m", "17:00", 120, open="10:00", close="18:00")])
    assert nodes[0].validation.status == ValidationStatus.WARNING
    assert nodes[0].validation.message == "Activity outside opening hours (10:00 - 18:00)"


def test_open_hours_inside_window_and_always_open():
    nodes = validate_nodes(
        [
            _node("m", "10:00", 120, open="10:00", close="18:00"),
            _node("t", "13:00", 60, open="24/7", close="24/7"),
            _node("n", "22:00", 60, open="18:00", close="02:00"),
        ]
    )
    assert [node.validation.status for node in nodes] == [ValidationStatus.VALID] * 3


def test_after_midnight_inside_overnight_window():
    """22:00-02:00 bar: 01:00 is open, 03:00 and midday are not"""
    nodes = _by_id(
        validate_nodes(
            [
                _node("late", "01:00", 30, open="22:00", close="02:00"),
                _node("closed", "03:00", 30, open="22:00", close="02:00"),
                _node("noon", "12:00", 30, open="22:00", close="02:00"),
            ]
        )
    )
    assert nodes["late"].validation.status == ValidationStatus.VALID
    assert nodes["closed"].validation.message == "Activity outside opening hours (22:00 - 02:00)"
    assert nodes["noon"].validation.status == ValidationStatus.WARNING


def test_unknown_hours_never_warn():
    nodes = validate_nodes([_node("m", "03:00", 60)])
    assert nodes[0].validation.status == ValidationStatus.VALID


def test_negative_cost_warning():
    nodes = validate_nodes([_node("a", cost=-5)])
    assert nodes[0].validation.status == ValidationStatus.WARNING
    assert nodes[0].validation.findings[0].code == "NEGATIVE_COST"


def test_cost_outlier_needs_enough_samples():
    few = validate_nodes([_node("a", "08:00", cost=100), _node("b", "10:00", cost=5000)])
    assert all(node.validation.status == ValidationStatus.VALID for node in few)

    many = _by_id(
        validate_nodes(
            [
                _node("a", "08:00", cost=100),
                _node("b", "10:00", cost=120),
                _node("c", "12:00", cost=80),
                _node("d", "14:00", cost=5000),
            ]
        )
    )
    assert many["d"].validation.status == ValidationStatus.WARNING
    assert many["d"].validation.findings[0].code == "COST_OUTLIER"
    assert many["a"].validation.status == ValidationStatus.VALID


def test_distance_warning():
    nodes = validate_nodes([_node("a", distance_km=4), _node("b", "11:00", distance_km=12.5)])
    assert nodes[0].validation.status == ValidationStatus.VALID
    assert nodes[1].validation.message == "Distance too far (12.5km)"


def test_overbooked_day_warns_every_node():
    nodes = validate_nodes([_node(f"p{i}", f"{8 + 3 * i:02d}:00", 180) for i in range(4)])
    assert all(node.validation.status == ValidationStatus.WARNING for node in nodes)
    assert nodes[0].validation.message == "Day is overbooked (12h total)"


def test_error_outranks_warning_in_message_order():
    nodes = _by_id(
        validate_nodes(
            [
                _node("a", "09:00", 60, open="10:00", close="18:00"),
                _node("b", "09:30", 30),
            ]
        )
    )
    validation = nodes["a"].validation
    assert validation.status == ValidationStatus.ERROR
    assert [f.code for f in validation.findings] == ["OVERLAP", "OPEN_HOURS"]
    assert validation.message == "Overlaps with B; Activity outside opening hours (10:00 - 18:00)"


def test_settings_thresholds_are_respected():
    settings = EditorSettings(max_distance_km=20)
    nodes = validate_nodes([_node("a", distance_km=12.5)], settings)
    assert nodes[0].validation.status == ValidationStatus.VALID


def test_validation_is_deterministic_and_pure():
    day = WorkflowDay(nodes=[_node("a", "09:00", 60), _node("b", "09:30", 30)])
    before = day.model_dump()
    first = validate_day(day)
    second = validate_day(day)
    assert [n.model_dump() for n in first] == [n.model_dump() for n in second]
    assert day.model_dump() == before


def test_stale_validation_is_replaced():
    day = WorkflowDay(nodes=[_node("a", "09:00", 60), _node("b", "09:30", 30)])
    flagged = validate_days([day])[0]
    flagged.nodes[1].start = "11:00"
    cleared = validate_day(flagged)
    assert all(node.validation.status == ValidationStatus.VALID for node in cleared)


def test_count_by_status():
    nodes = validate_nodes([_node("a", "09:00", 60), _node("b", "09:30", 30), _node("c", "12:00", 30)])
    counts = count_by_status(nodes)
    assert counts[ValidationStatus.ERROR] == 2
    assert counts[ValidationStatus.VALID] == 1

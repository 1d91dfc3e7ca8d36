"""
Scenario Loader Tests

Tests loading JSON scenarios, deriving Available from totals, and
rejecting malformed input.
"""

import json
import sys
import tempfile
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from utils.scenario_loader import (
    build_scenario,
    get_scenario_description,
    load_scenario,
    parse_request_arg,
    ScenarioLoadError,
)


SCENARIOS_DIR = project_root / "tests" / "scenarios"


def _valid_data() -> dict:
    return {
        "available": [1, 1],
        "max": [[2, 1], [1, 2]],
        "allocation": [[1, 0], [0, 1]],
    }


def test_load_textbook_scenario():
    print("\n" + "="*60)
    print("TEST 1: Load Textbook Scenario")
    print("="*60)

    banker, actions = load_scenario(str(SCENARIOS_DIR / "textbook.json"))
    print(f"  Processes: {banker.num_processes}, Resources: {banker.num_resources}")
    assert banker.num_processes == 5 and banker.num_resources == 3
    assert banker.available == [3, 3, 2]
    assert banker.need[0] == [7, 4, 3]

    assert [a['type'] for a in actions] == ['request', 'request', 'request', 'release']
    assert actions[0] == {'type': 'request', 'process': 1, 'amount': [1, 0, 2]}
    assert actions[3] == {'type': 'release', 'process': 1, 'amount': None}
    print("  ✓ Matrices and actions loaded")


def test_available_derived_from_total():
    banker, actions = load_scenario(str(SCENARIOS_DIR / "textbook_total.json"))
    assert banker.available == [3, 3, 2], "Available = total - allocated"
    assert actions == []
    assert banker.precondition_violations([10, 5, 7]) == []


def test_total_smaller_than_allocations_is_rejected():
    data = _valid_data()
    del data["available"]
    data["total"] = [1, 1]
    data["allocation"] = [[1, 0], [1, 1]]
    data["max"] = [[2, 1], [2, 2]]
    try:
        build_scenario(data)
    except ScenarioLoadError as e:
        print(f"  ✓ Rejected: {e}")
        assert "R0" in str(e)
    else:
        assert False, "Allocations above the total should be rejected"


def test_allocation_exceeding_max_is_rejected():
    try:
        load_scenario(str(SCENARIOS_DIR / "allocation_exceeds_max.json"))
    except ScenarioLoadError as e:
        print(f"  ✓ Rejected: {e}")
        assert "exceeds max" in str(e)
    else:
        assert False, "Allocation > Max should be rejected"


def test_invalid_scenarios_are_rejected():
    """Each malformed variant raises ScenarioLoadError."""
    print("\n" + "="*60)
    print("TEST 2: Invalid Scenarios")
    print("="*60)

    def variant(**changes):
        data = _valid_data()
        for key, value in changes.items():
            if value is None:
                data.pop(key, None)
            else:
                data[key] = value
        return data

    invalid = {
        "missing max": variant(max=None),
        "missing allocation": variant(allocation=None),
        "no available or total": variant(available=None),
        "both available and total": variant(total=[2, 2]),
        "negative value": variant(available=[-1, 1]),
        "float value": variant(available=[1.5, 1]),
        "bool value": variant(available=[True, 1]),
        "short available": variant(available=[1]),
        "ragged max": variant(max=[[2, 1], [1]]),
        "row count mismatch": variant(allocation=[[1, 0]]),
        "declared processes mismatch": variant(processes=3),
        "zero resources": variant(resources=0),
        "request out of range": variant(requests=[{"process": 2, "request": [0, 0]}]),
        "request and release": variant(requests=[{"process": 0, "request": [0, 0], "release": "all"}]),
        "request missing process": variant(requests=[{"request": [0, 0]}]),
        "not an object": [1, 2, 3],
    }

    for name, data in invalid.items():
        try:
            build_scenario(data)
        except ScenarioLoadError as e:
            print(f"  ✓ {name}: {e}")
        else:
            assert False, f"Scenario with {name} should be rejected"


def test_missing_and_malformed_files():
    try:
        load_scenario(str(SCENARIOS_DIR / "does_not_exist.json"))
    except ScenarioLoadError as e:
        assert "not found" in str(e)
    else:
        assert False, "Missing file should be rejected"

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        try:
            load_scenario(str(path))
        except ScenarioLoadError as e:
            assert "Invalid JSON" in str(e)
        else:
            assert False, "Broken JSON should be rejected"


def test_release_amounts():
    data = _valid_data()
    data["requests"] = [
        {"process": 0, "release": [1, 0]},
        {"process": 1, "release": None},
    ]
    _, actions = build_scenario(data)
    assert actions[0] == {'type': 'release', 'process': 0, 'amount': [1, 0]}
    assert actions[1] == {'type': 'release', 'process': 1, 'amount': None}


def test_parse_request_arg():
    assert parse_request_arg("1:1,0,2", 5, 3) == {'type': 'request', 'process': 1, 'amount': [1, 0, 2]}
    assert parse_request_arg("P4:3, 3, 0", 5, 3)['process'] == 4

    for text in ["1-1,0,2", "x:1,0,2", "1:1,0", "9:0,0,0", "1:1,a,2"]:
        try:
            parse_request_arg(text, 5, 3)
        except ScenarioLoadError:
            print(f"  ✓ '{text}' rejected")
        else:
            assert False, f"'{text}' should be rejected"


def test_scenario_description():
    description = get_scenario_description(str(SCENARIOS_DIR / "textbook.json"))
    assert description.startswith("Silberschatz")
    assert get_scenario_description(str(SCENARIOS_DIR / "does_not_exist.json")) == ""
    assert get_scenario_description(str(SCENARIOS_DIR / "allocation_exceeds_max.json")) == ""


def test_scenario_files_are_valid_json():
    for path in sorted(SCENARIOS_DIR.glob("*.json")):
        with open(path, encoding="utf-8") as f:
            json.load(f)


def main():
    """Run all scenario loader tests."""
    try:
        test_load_textbook_scenario()
        test_available_derived_from_total()
        test_total_smaller_than_allocations_is_rejected()
        test_allocation_exceeding_max_is_rejected()
        test_invalid_scenarios_are_rejected()
        test_missing_and_malformed_files()
        test_release_amounts()
        test_parse_request_arg()
        test_scenario_description()
        test_scenario_files_are_valid_json()
        print("\n✅ Scenario Loader Tests PASSED")
        return 0
    except AssertionError as e:
        print(f"\n❌ TEST FAILED: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())

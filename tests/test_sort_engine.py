from dataclasses import dataclass

import pytest

from research_node.core.exceptions import InvalidInputError
from research_node.services.sort_engine import (
    binary_insertion_sort,
    bubble_sort,
    quick_sort,
    run_benchmark,
)

ALGORITHMS = [bubble_sort, quick_sort, binary_insertion_sort]


@dataclass(frozen=True)
class Keyed:
    key: int
    tag: str

    def __lt__(self, other: "Keyed") -> bool:
        return self.key < other.key


@pytest.mark.parametrize("sort", ALGORITHMS)
@pytest.mark.parametrize(
    "values",
    [
        [],
        [7],
        [5, 3, 1, 4, 1],
        [9, 8, 7, 6, 5, 4, 3, 2, 1],
        [1, 2, 3, 4, 5],
        [2, 2, 2],
        [3.5, -1, 0, 2, -7.25],
        ["pear", "apple", "fig"],
    ],
)
def test_algorithms_match_reference_sort(sort, values):
    assert sort(values) == sorted(values)


@pytest.mark.parametrize("sort", ALGORITHMS)
def test_algorithms_do_not_mutate_input(sort):
    values = [3, 1, 2]

    sort(values)

    assert values == [3, 1, 2]


@pytest.mark.parametrize("sort", ALGORITHMS)
def test_algorithms_keep_equal_keys_in_input_order(sort):
    values = [Keyed(2, "a"), Keyed(1, "b"), Keyed(2, "c"), Keyed(1, "d"), Keyed(2, "e")]

    result = sort(values)

    assert [item.tag for item in result] == ["b", "d", "a", "c", "e"]


def test_quick_sort_handles_large_presorted_input():
    values = list(range(5000))

    assert quick_sort(values) == values


def test_benchmark_reports_every_algorithm():
    results = run_benchmark([5, 3, 1, 4, 1])

    assert set(results) == {"bubbleSort", "quickSort", "binarySort"}
    for result in results.values():
        assert result["sortedList"] == [1, 1, 3, 4, 5]
        assert result["elapsedTime"].endswith(" ms")
        assert result["memoryUsage"].endswith(" MB")
        assert result["cpuUsage"].endswith("%")


@pytest.mark.parametrize("payload", [None, "5,3,1", {"a": 1}, 42, (1, 2)])
def test_benchmark_rejects_non_lists(payload):
    with pytest.raises(InvalidInputError):
        run_benchmark(payload)


def test_benchmark_rejects_incomparable_elements():
    with pytest.raises(InvalidInputError):
        run_benchmark([1, "a", 2])


@pytest.mark.parametrize("values", [[3, float("nan"), 1], [1, float("inf")], [float("-inf")]])
def test_benchmark_rejects_non_finite_numbers(values):
    with pytest.raises(InvalidInputError, match="finite"):
        run_benchmark(values)


def test_sort_endpoint(client, auth_headers):
    response = client.post("/sort", json={"list": [5, 3, 1, 4, 1]}, headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    for name in ("bubbleSort", "quickSort", "binarySort"):
        assert body[name]["sortedList"] == [1, 1, 3, 4, 5]


def test_sort_endpoint_rejects_invalid_input(client, auth_headers):
    not_a_list = client.post("/sort", json={"list": "nope"}, headers=auth_headers)
    missing = client.post("/sort", json={}, headers=auth_headers)
    mixed = client.post("/sort", json={"list": [1, "a"]}, headers=auth_headers)

    assert not_a_list.status_code == 400
    assert not_a_list.json()["error"] == "Invalid input: List must be an array"
    assert missing.status_code == 400
    assert mixed.status_code == 400


def test_sort_endpoint_requires_auth(client):
    assert client.post("/sort", json={"list": [1]}).status_code == 401


def test_sort_endpoint_rejects_nan(client, auth_headers):
    response = client.post(
        "/sort",
        content='{"list": [NaN, 1]}',
        headers={**auth_headers, "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid input: List elements must be finite numbers"

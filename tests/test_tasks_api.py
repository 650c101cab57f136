"""Test the /tasks HTTP surface end to end."""


def ids(tasks):
    return [t["id"] for t in tasks]


# ---------------------------------------------------------------------------
# List
# ---------------------------------------------------------------------------

def test_list_returns_seeded_tasks_in_store_order(client):
    response = client.get("/tasks")
    assert response.status_code == 200
    assert ids(response.json()) == [1, 3, 2]


def test_list_legacy_task_is_normalized(client):
    legacy = client.get("/tasks/2").json()
    assert legacy["priority"] == "medium"
    assert legacy["createdAt"]


def test_list_filter_by_priority(client):
    client.post("/tasks", json={"title": "A", "description": "B", "priority": "high"})
    response = client.get("/tasks", params={"priority": "high"})
    tasks = response.json()
    assert ids(tasks) == [3, 4]
    assert all(t["priority"] == "high" for t in tasks)


def test_list_invalid_priority_filter_is_ignored(client):
    response = client.get("/tasks", params={"priority": "urgent"})
    assert response.status_code == 200
    assert ids(response.json()) == [1, 3, 2]


def test_list_filter_completed_true(client):
    response = client.get("/tasks", params={"completed": "true"})
    assert ids(response.json()) == [3]


def test_list_filter_completed_non_true_means_false(client):
    for value in ("false", "no", "1"):
        response = client.get("/tasks", params={"completed": value})
        assert ids(response.json()) == [1, 2]


def test_list_sort_ascending(client):
    for value in ("createdAt", "date"):
        response = client.get("/tasks", params={"sort": value})
        assert ids(response.json()) == [1, 2, 3]


def test_list_sort_descending(client):
    for value in ("createdAt-desc", "date-desc"):
        response = client.get("/tasks", params={"sort": value})
        assert ids(response.json()) == [3, 2, 1]


def test_list_unknown_sort_keeps_store_order(client):
    response = client.get("/tasks", params={"sort": "title"})
    assert ids(response.json()) == [1, 3, 2]


def test_list_combined_filters(client):
    response = client.get(
        "/tasks", params={"completed": "false", "priority": "medium", "sort": "date-desc"}
    )
    assert ids(response.json()) == [2]


def test_list_empty_store(empty_client):
    response = empty_client.get("/tasks")
    assert response.status_code == 200
    assert response.json() == []


# ---------------------------------------------------------------------------
# Get
# ---------------------------------------------------------------------------

def test_get_task(client):
    response = client.get("/tasks/3")
    assert response.status_code == 200
    assert response.json() == {
        "id": 3,
        "title": "High task",
        "description": "Something urgent",
        "completed": True,
        "priority": "high",
        "createdAt": "2024-01-03T00:00:00.000Z",
    }


def test_get_is_idempotent(client):
    assert client.get("/tasks/1").json() == client.get("/tasks/1").json()


def test_get_invalid_id_is_400(client):
    response = client.get("/tasks/abc")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid task ID"}


def test_get_id_with_trailing_text_uses_leading_integer(client):
    response = client.get("/tasks/3abc")
    assert response.status_code == 200
    assert response.json()["id"] == 3


def test_get_missing_is_404(client):
    response = client.get("/tasks/999")
    assert response.status_code == 404
    assert response.json() == {"error": "Task not found"}


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

def test_create_applies_defaults(client):
    response = client.post("/tasks", json={"title": "A", "description": "B"})
    assert response.status_code == 201
    task = response.json()
    assert task["id"] == 4
    assert task["completed"] is False
    assert task["priority"] == "medium"
    assert task["createdAt"].endswith("Z")
    assert client.get(f"/tasks/{task['id']}").json() == task


def test_create_trims_text(client):
    response = client.post(
        "/tasks", json={"title": "  Pad  ", "description": "\tdesc\n", "completed": True}
    )
    task = response.json()
    assert task["title"] == "Pad"
    assert task["description"] == "desc"
    assert task["completed"] is True


def test_create_ids_are_monotonic_and_not_reused(client):
    first = client.post("/tasks", json={"title": "A", "description": "B"}).json()
    client.delete(f"/tasks/{first['id']}")
    second = client.post("/tasks", json={"title": "C", "description": "D"}).json()
    assert second["id"] > first["id"]


def test_create_first_id_on_empty_store_is_one(empty_client):
    response = empty_client.post("/tasks", json={"title": "A", "description": "B"})
    assert response.json()["id"] == 1


def test_create_rejects_blank_title(client):
    response = client.post("/tasks", json={"title": "", "description": "x"})
    assert response.status_code == 400
    assert response.json() == {"error": "Title is required and must be a non-empty string"}


def test_create_rejects_missing_description(client):
    response = client.post("/tasks", json={"title": "x"})
    assert response.status_code == 400
    assert response.json() == {
        "error": "Description is required and must be a non-empty string"
    }


def test_create_rejects_non_boolean_completed(client):
    response = client.post(
        "/tasks", json={"title": "x", "description": "y", "completed": "true"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Completed must be a boolean value"}


def test_create_rejects_unknown_priority(client):
    response = client.post(
        "/tasks", json={"title": "x", "description": "y", "priority": "urgent"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Priority must be one of: low, medium, high"}


def test_create_without_body_fails_title_check(client):
    response = client.post("/tasks")
    assert response.status_code == 400
    assert response.json()["error"].startswith("Title is required")


def test_create_malformed_json(client):
    response = client.post(
        "/tasks", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Malformed JSON body"}


def test_create_rejection_does_not_mutate_store(client):
    client.post("/tasks", json={"title": "x", "description": "y", "priority": "urgent"})
    assert len(client.get("/tasks").json()) == 3
    assert client.post("/tasks", json={"title": "A", "description": "B"}).json()["id"] == 4


# ---------------------------------------------------------------------------
# Update
# ---------------------------------------------------------------------------

def test_update_keeps_unsent_fields(client):
    response = client.put("/tasks/3", json={"title": "x", "description": "y"})
    assert response.status_code == 200
    task = response.json()
    assert task["title"] == "x"
    assert task["description"] == "y"
    assert task["completed"] is True
    assert task["priority"] == "high"
    assert task["createdAt"] == "2024-01-03T00:00:00.000Z"


def test_update_replaces_sent_fields(client):
    response = client.put(
        "/tasks/1",
        json={"title": " New ", "description": "Text", "completed": True, "priority": "high"},
    )
    task = response.json()
    assert task == {
        "id": 1,
        "title": "New",
        "description": "Text",
        "completed": True,
        "priority": "high",
        "createdAt": "2024-01-01T00:00:00.000Z",
    }
    assert client.get("/tasks/1").json() == task


def test_update_requires_title_and_description(client):
    response = client.put("/tasks/1", json={"completed": True})
    assert response.status_code == 400
    assert response.json()["error"].startswith("Title is required")


def test_update_validates_body_before_id(client):
    response = client.put("/tasks/abc", json={"title": "x"})
    assert response.status_code == 400
    assert response.json()["error"].startswith("Description is required")


def test_update_invalid_id(client):
    response = client.put("/tasks/abc", json={"title": "x", "description": "y"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid task ID"}


def test_update_missing_task(client):
    response = client.put("/tasks/42", json={"title": "x", "description": "y"})
    assert response.status_code == 404
    assert response.json() == {"error": "Task not found"}


# ---------------------------------------------------------------------------
# Priority path
# ---------------------------------------------------------------------------

def test_priority_path_filters(client):
    response = client.get("/tasks/priority/medium")
    assert response.status_code == 200
    assert ids(response.json()) == [2]


def test_priority_path_is_case_insensitive(client):
    response = client.get("/tasks/priority/HiGh")
    assert ids(response.json()) == [3]


def test_priority_path_rejects_unknown_level(client):
    response = client.get("/tasks/priority/urgent")
    assert response.status_code == 400
    assert response.json() == {
        "error": "Invalid priority level. Must be one of: low, medium, high"
    }


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

def test_delete_returns_removed_task(client):
    before = client.get("/tasks/1").json()
    response = client.delete("/tasks/1")
    assert response.status_code == 200
    assert response.json() == {"message": "Task deleted successfully", "task": before}


def test_delete_is_permanent(client):
    client.delete("/tasks/3")
    assert client.get("/tasks/3").status_code == 404
    assert 3 not in ids(client.get("/tasks").json())
    assert client.delete("/tasks/3").status_code == 404


def test_delete_invalid_id(client):
    response = client.delete("/tasks/abc")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid task ID"}


# ---------------------------------------------------------------------------
# Service routes
# ---------------------------------------------------------------------------

def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/nope")
    assert response.status_code == 404
    assert "error" in response.json()


def test_request_id_header_echoed(client):
    response = client.get("/tasks", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


def test_request_id_generated_when_absent(client):
    response = client.get("/tasks")
    assert response.headers["X-Request-ID"]


# ---------------------------------------------------------------------------
# Form-encoded bodies
# ---------------------------------------------------------------------------

def test_create_from_form_body(client):
    response = client.post("/tasks", data={"title": " A ", "description": "B", "priority": "low"})
    assert response.status_code == 201
    task = response.json()
    assert task["title"] == "A"
    assert task["priority"] == "low"
    assert task["completed"] is False


def test_form_completed_is_not_a_boolean(client):
    response = client.post(
        "/tasks", data={"title": "A", "description": "B", "completed": "true"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Completed must be a boolean value"}


def test_update_from_form_body(client):
    response = client.put("/tasks/3", data={"title": "x", "description": "y"})
    assert response.status_code == 200
    assert response.json()["priority"] == "high"


def test_empty_form_fails_title_check(client):
    response = client.post(
        "/tasks", content=b"", headers={"Content-Type": "application/x-www-form-urlencoded"}
    )
    assert response.status_code == 400
    assert response.json()["error"].startswith("Title is required")

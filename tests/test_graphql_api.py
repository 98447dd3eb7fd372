from datetime import datetime

from fastapi.testclient import TestClient

from task_tracker.main import app, create_app
from task_tracker.repositories import InMemoryTaskRepository

ENDPOINT = "/api/graphql"


def post_operation(client, query, variables=None):
    payload = {"query": query}
    if variables is not None:
        payload["variables"] = variables
    return client.post(ENDPOINT, json=payload)


def assert_task_shape(task: dict):
    for key in ["id", "title", "status", "createdAt", "updatedAt"]:
        assert key in task
    assert isinstance(task["id"], str)
    assert isinstance(task["title"], str)
    assert task["status"] in ("TODO", "IN_PROGRESS", "DONE")
    # Timestamps are ISO8601 UTC strings
    datetime.fromisoformat(task["createdAt"].replace("Z", "+00:00"))
    datetime.fromisoformat(task["updatedAt"].replace("Z", "+00:00"))
    if "dueDate" in task:
        datetime.strptime(task["dueDate"], "%Y-%m-%d")


class TestHealth:
    def test_health_check(self, client):
        res = client.get("/")
        assert res.status_code == 200
        assert res.json() == {"message": "Healthy", "tasks": 4}

    def test_module_level_app_is_seeded(self):
        res = TestClient(app).get("/")
        assert res.status_code == 200
        assert res.json()["message"] == "Healthy"


class TestOperations:
    def test_list_tasks(self, client):
        res = post_operation(client, "query { tasks { id title status dueDate } }")
        assert res.status_code == 200
        tasks = res.json()["data"]["tasks"]
        assert len(tasks) == 4
        for task in tasks:
            assert_task_shape(task)

    def test_create_get_update_delete_flow(self, client):
        res_create = post_operation(
            client,
            "mutation CreateTask($input: TaskInput!) { createTask(input: $input) { id } }",
            {"input": {"title": "Write tests", "description": "Cover the API", "dueDate": "2024-02-01"}},
        )
        assert res_create.status_code == 200
        created = res_create.json()["data"]["createTask"]
        assert_task_shape(created)
        assert created["id"] == "5"
        assert created["status"] == "TODO"
        assert created["dueDate"] == "2024-02-01"

        res_get = post_operation(client, "query GetTask($id: ID!) { task(id: $id) { id } }", {"id": "5"})
        assert res_get.json()["data"]["task"] == created

        res_update = post_operation(
            client,
            "mutation UpdateTask($id: ID!, $input: TaskInput!) { updateTask(id: $id, input: $input) { id } }",
            {"id": "5", "input": {"status": "IN_PROGRESS", "description": None}},
        )
        updated = res_update.json()["data"]["updateTask"]
        assert updated["status"] == "IN_PROGRESS"
        assert updated["title"] == "Write tests"
        assert "description" not in updated
        assert updated["createdAt"] == created["createdAt"]

        res_by_status = post_operation(
            client, "query { tasksByStatus(status: $status) { id } }", {"status": "IN_PROGRESS"}
        )
        assert [t["id"] for t in res_by_status.json()["data"]["tasksByStatus"]] == ["5", "2"]

        res_delete = post_operation(client, "mutation DeleteTask($id: ID!) { deleteTask(id: $id) }", {"id": "5"})
        assert res_delete.json() == {"data": {"deleteTask": True}}
        res_delete_again = post_operation(client, "mutation DeleteTask($id: ID!) { deleteTask(id: $id) }", {"id": "5"})
        assert res_delete_again.status_code == 200
        assert res_delete_again.json() == {"data": {"deleteTask": False}}

    def test_not_found_is_200_with_null(self, client):
        res = post_operation(client, "query GetTask($id: ID!) { task(id: $id) { id } }", {"id": "404"})
        assert res.status_code == 200
        assert res.json() == {"data": {"task": None}}

    def test_unknown_query_is_200_error_envelope(self, client):
        res = post_operation(client, "query { projects { id } }")
        assert res.status_code == 200
        assert res.json() == {"errors": [{"message": "Unknown query"}]}

    def test_execution_failure_is_200_error_envelope(self, client):
        res = post_operation(client, "mutation { createTask(input: $input) { id } }", {"input": {"bogus": 1}})
        assert res.status_code == 200
        assert res.json() == {"errors": [{"message": "Query execution failed"}]}

    def test_extra_body_keys_are_ignored(self, client):
        res = client.post(ENDPOINT, json={"query": "query { tasks { id } }", "operationName": "ListTasks"})
        assert res.status_code == 200
        assert len(res.json()["data"]["tasks"]) == 4


class TestInvalidRequests:
    def assert_invalid(self, res):
        assert res.status_code == 400
        assert res.json() == {"errors": [{"message": "Invalid request"}]}

    def assert_execution_failed(self, res):
        assert res.status_code == 200
        assert res.json() == {"errors": [{"message": "Query execution failed"}]}

    def test_unparseable_json(self, client):
        res = client.post(ENDPOINT, content="{not json", headers={"Content-Type": "application/json"})
        self.assert_invalid(res)

    def test_null_body(self, client):
        self.assert_invalid(client.post(ENDPOINT, content="null", headers={"Content-Type": "application/json"}))

    def test_empty_body(self, client):
        self.assert_invalid(client.post(ENDPOINT, content="", headers={"Content-Type": "application/json"}))

    def test_missing_query_fails_with_200(self, client):
        self.assert_execution_failed(client.post(ENDPOINT, json={"variables": {}}))

    def test_non_string_query_fails_with_200(self, client):
        self.assert_execution_failed(client.post(ENDPOINT, json={"query": 42}))

    def test_non_object_body_fails_with_200(self, client):
        self.assert_execution_failed(client.post(ENDPOINT, json=["tasks"]))

    def test_non_object_variables_are_ignored(self, client):
        res = client.post(ENDPOINT, json={"query": "query { tasks { id } }", "variables": [1]})
        assert res.status_code == 200
        assert len(res.json()["data"]["tasks"]) == 4


class TestIsolation:
    def test_apps_do_not_share_state(self):
        first = TestClient(create_app(repository=InMemoryTaskRepository()))
        second = TestClient(create_app(repository=InMemoryTaskRepository()))
        post_operation(first, "mutation { createTask(input: $input) { id } }", {"input": {"title": "only here"}})

        assert len(post_operation(first, "query { tasks { id } }").json()["data"]["tasks"]) == 1
        assert post_operation(second, "query { tasks { id } }").json() == {"data": {"tasks": []}}

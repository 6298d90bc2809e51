# backend/tests/api/test_projects.py
import pytest
from fastapi import status

def test_create_project(client):
    """Test project creation"""
    response = client.post(
        "/api/projects",
        json={"name": "New Project", "description": "Project Description", "jobNumber": "NP-1"}
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == "New Project"
    assert data["description"] == "Project Description"
    assert data["jobNumber"] == "NP-1"
    assert data["stage"] == "pre-construction"
    assert "id" in data
    assert "createdAt" in data

def test_get_project(client, sample_project):
    """Test getting a single project with its counters"""
    response = client.get(f"/api/projects/{sample_project['id']}")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == sample_project["name"]
    assert data["role"] == "administrator"
    assert data["memberCount"] == 1
    assert data["documentCount"] == 0

def test_list_projects(client, sample_project):
    """Only the caller's projects are listed"""
    response = client.get("/api/projects")

    assert response.status_code == status.HTTP_200_OK
    assert [p["id"] for p in response.json()] == [sample_project["id"]]

    other = client.get("/api/projects", headers={"X-User-Id": "someone-else"})
    assert other.json() == []

def test_update_project(client, sample_project):
    """Test updating a project"""
    update_data = {
        "name": "Updated Project",
        "stage": "course-of-construction"
    }
    response = client.put(
        f"/api/projects/{sample_project['id']}",
        json=update_data
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == update_data["name"]
    assert data["stage"] == update_data["stage"]
    assert data["description"] == sample_project["description"]

def test_delete_project_cascades(client, sample_project):
    """Test deleting a project removes its records"""
    project_id = sample_project["id"]
    client.post("/api/tasks", json={"projectId": project_id, "title": "Mobilize"})
    client.post("/api/documents", json={"projectId": project_id, "name": "Drawings", "type": "folder"})

    response = client.delete(f"/api/projects/{project_id}")

    assert response.status_code == status.HTTP_200_OK
    removed = response.json()["removed"]
    assert removed["tasks"] == 1
    assert removed["documents"] == 1
    assert removed["projects"] == 1

    # Verify project is deleted
    get_response = client.get(f"/api/projects/{project_id}")
    assert get_response.status_code == status.HTTP_404_NOT_FOUND
    assert client.get(f"/api/tasks/project/{project_id}").json() == []

def test_delete_project_requires_administrator(client, sample_project):
    response = client.delete(f"/api/projects/{sample_project['id']}", headers={"X-User-Id": "someone-else"})
    assert response.status_code == status.HTTP_403_FORBIDDEN

def test_member_upsert(client, sample_project):
    project_id = sample_project["id"]
    first = client.put(f"/api/projects/{project_id}/members", json={"userId": "user-2"})
    second = client.put(f"/api/projects/{project_id}/members", json={"userId": "user-2", "role": "administrator"})

    assert first.status_code == status.HTTP_200_OK
    assert second.json()["id"] == first.json()["id"]
    assert len(client.get(f"/api/projects/{project_id}/members").json()) == 2

    role = client.get(f"/api/projects/{project_id}/role", headers={"X-User-Id": "user-2"})
    assert role.json()["role"] == "administrator"

    removed = client.delete(f"/api/projects/{project_id}/members/user-2")
    assert removed.status_code == status.HTTP_200_OK
    assert client.delete(f"/api/projects/{project_id}/members/user-2").status_code == status.HTTP_404_NOT_FOUND

def test_get_nonexistent_project(client):
    """Test getting a project that doesn't exist"""
    response = client.get("/api/projects/99999")
    assert response.status_code == status.HTTP_404_NOT_FOUND

@pytest.mark.parametrize("payload", [
    {"description": "Missing name field"},
    {"name": "Negative", "contractValue": -10},
])
def test_invalid_project_data(client, payload):
    """Test creating a project with invalid data"""
    response = client.post("/api/projects", json=payload)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

@pytest.mark.parametrize("payload, expected", [
    ({"name": "Tower A"}, None),
    ({"name": "Tower A", "contractValue": ""}, None),
    ({"name": "Tower A", "contractValue": None}, None),
    ({"name": "Tower A", "contractValue": 1250000}, 1250000),
])
def test_contract_value_is_optional(client, payload, expected):
    response = client.post("/api/projects", json=payload)

    assert response.status_code == status.HTTP_200_OK
    project = response.json()
    assert project["contractValue"] == expected
    assert client.get(f"/api/projects/{project['id']}").json()["contractValue"] == expected

"""
Test the saved cover letter endpoints and document export
"""

from io import BytesIO
from urllib.parse import unquote
from unittest.mock import patch

import docx

from conftest import auth_headers

LETTER = {
    "template_name": "Backend role",
    "template_description": "Acme backend engineer",
    "cover_letter_content": "Dear Hiring Manager,\n\nI build things.\n\nSincerely,\nJane",
}


def _create(client, user_id="user-1", **overrides):
    response = client.post("/cover-letters", json={**LETTER, **overrides}, headers=auth_headers(user_id))
    assert response.status_code == 201
    return response.json()["data"]


def test_create_and_list(client):
    created = _create(client)

    assert created["user_id"] == "user-1"
    assert created["template_name"] == "Backend role"

    response = client.get("/cover-letters", headers=auth_headers("user-1"))

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["data"][0]["id"] == created["id"]


def test_create_missing_fields(client):
    response = client.post("/cover-letters", json={"template_name": "x"}, headers=auth_headers())

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}


def test_pagination_and_isolation(client):
    for i in range(12):
        _create(client, template_name=f"Letter {i}")
    _create(client, user_id="user-2")

    first = client.get("/cover-letters", headers=auth_headers("user-1")).json()
    second = client.get("/cover-letters?limit=5&offset=10", headers=auth_headers("user-1")).json()
    capped = client.get("/cover-letters?limit=1000", headers=auth_headers("user-1")).json()

    assert (len(first["data"]), first["total"]) == (10, 12)
    assert (len(second["data"]), second["total"]) == (2, 12)
    assert len(capped["data"]) == 12
    assert all(item["user_id"] == "user-1" for item in capped["data"])


def test_update(client):
    created = _create(client)

    response = client.patch(
        f"/cover-letters?id={created['id']}",
        json={"cover_letter_content": "Updated"},
        headers=auth_headers(),
    )

    assert response.status_code == 200
    assert response.json()["data"]["cover_letter_content"] == "Updated"
    assert response.json()["data"]["template_name"] == "Backend role"


def test_update_errors(client):
    created = _create(client)

    no_id = client.patch("/cover-letters", json={"template_name": "x"}, headers=auth_headers())
    no_fields = client.patch(f"/cover-letters?id={created['id']}", json={}, headers=auth_headers())
    other_owner = client.patch(f"/cover-letters?id={created['id']}", json={"template_name": "x"}, headers=auth_headers("user-2"))

    assert (no_id.status_code, no_id.json()) == (400, {"error": "Missing cover letter ID"})
    assert (no_fields.status_code, no_fields.json()) == (400, {"error": "No fields to update"})
    assert other_owner.status_code == 404


def test_delete(client):
    created = _create(client)

    assert client.delete(f"/cover-letters?id={created['id']}", headers=auth_headers("user-2")).status_code == 404

    response = client.delete(f"/cover-letters?id={created['id']}", headers=auth_headers())

    assert response.json() == {"success": True}
    assert client.get("/cover-letters", headers=auth_headers()).json()["total"] == 0


def test_export_docx(client):
    response = client.post(
        "/cover-letters/export",
        json={"content": LETTER["cover_letter_content"], "label": "Jane Doe", "format": "docx"},
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/vnd.openxmlformats")
    assert response.headers["content-disposition"] == 'attachment; filename="Jane Doe Cover Letter.docx"'
    document = docx.Document(BytesIO(response.content))
    assert [p.text for p in document.paragraphs] == ["Dear Hiring Manager,", "I build things.", "Sincerely,", "Jane"]


def test_export_pdf(client):
    with patch("covercraft.services.letter_export.create_pdf", return_value=b"%PDF-1.7 test"):
        response = client.post("/cover-letters/export", json={"content": "Hello", "label": ""})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="Unknown Cover Letter.pdf"' in response.headers["content-disposition"]
    assert response.content == b"%PDF-1.7 test"


def test_export_rejects_empty_content(client):
    response = client.post("/cover-letters/export", json={"content": "  \n "})

    assert response.status_code == 400


def test_export_rejects_unknown_format(client):
    response = client.post("/cover-letters/export", json={"content": "Hello", "format": "odt"})

    assert response.status_code == 400
    assert "error" in response.json()


def test_export_with_non_latin_label(client):
    response = client.post(
        "/cover-letters/export",
        json={"content": "Dear Hiring Manager,\nHello", "label": "李雷", "format": "docx"},
    )

    assert response.status_code == 200
    disposition = response.headers["content-disposition"]
    assert 'filename="Unknown Cover Letter.docx"' in disposition
    assert unquote(disposition.split("filename*=UTF-8''", 1)[1]) == "李雷 Cover Letter.docx"

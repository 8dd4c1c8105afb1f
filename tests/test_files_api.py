"""Tests for versioned file uploads, history, archive and deletion."""
import io
import zipfile

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from contenthub.models.file import ProjectFile


def files_of(client, project_id, **params):
    return client.get(f"/api/v1/files/project/{project_id}", params=params).json()["files"]


class TestUploadVersioning:
    """Tests for version assignment on upload."""

    def test_first_upload(self, client, make_project, upload, storage):
        project = make_project()

        response = upload(project["id"], ("brief.pdf", b"first draft"))

        assert response.status_code == 201
        body = response.json()
        assert body["uploaded"] == 1
        assert body["requested"] == 1
        assert body["error"] is None

        stored = body["files"][0]
        assert stored["name"] == "brief.pdf"
        assert stored["version"] == "1.0"
        assert stored["is_latest"] is True
        assert stored["previous_version_id"] is None
        assert stored["size"] == len(b"first draft")
        assert stored["uploaded_by"] == "Content Team"
        assert stored["s3_key"] == f"projects/{project['id']}/{stored['id']}-brief.pdf"
        assert storage.objects[stored["s3_key"]] == b"first draft"

    def test_reupload_creates_new_latest_version(self, client, make_project, upload):
        project = make_project()
        first = upload(project["id"], ("brief.pdf", b"v1")).json()["files"][0]

        second = upload(project["id"], ("brief.pdf", b"v2"), uploaded_by="Dana").json()["files"][0]

        assert second["version"] == "1.1"
        assert second["previous_version_id"] == first["id"]
        assert second["uploaded_by"] == "Dana"

        listed = {f["id"]: f for f in files_of(client, project["id"])}
        assert listed[first["id"]]["is_latest"] is False
        assert listed[second["id"]]["is_latest"] is True

    def test_one_latest_per_name(self, client, make_project, upload):
        project = make_project()
        for body in (b"a", b"b", b"c"):
            upload(project["id"], ("cut.mp4", body))
        upload(project["id"], ("brief.pdf", b"x"))

        latest = files_of(client, project["id"], latest_only=True)

        assert sorted((f["name"], f["version"]) for f in latest) == [
            ("brief.pdf", "1.0"),
            ("cut.mp4", "1.2"),
        ]
        assert len(files_of(client, project["id"])) == 4

    def test_same_name_twice_in_one_batch(self, make_project, upload):
        project = make_project()

        body = upload(project["id"], ("brief.pdf", b"v1"), ("brief.pdf", b"v2")).json()

        assert [f["version"] for f in body["files"]] == ["1.0", "1.1"]
        assert body["files"][1]["previous_version_id"] == body["files"][0]["id"]

    def test_projects_are_independent(self, make_project, upload):
        one = make_project(title="One")
        two = make_project(title="Two")
        upload(one["id"], ("brief.pdf", b"v1"))
        upload(one["id"], ("brief.pdf", b"v2"))

        other = upload(two["id"], ("brief.pdf", b"v1")).json()["files"][0]

        assert other["version"] == "1.0"
        assert other["previous_version_id"] is None

    def test_names_are_case_sensitive(self, make_project, upload):
        project = make_project()
        upload(project["id"], ("Brief.pdf", b"v1"))

        lower = upload(project["id"], ("brief.pdf", b"v1")).json()["files"][0]

        assert lower["version"] == "1.0"

    def test_continues_after_malformed_sibling(self, client, db_session, make_project, upload):
        project = make_project()
        db_session.add(ProjectFile(
            id="legacy1", project_id=project["id"], name="brief.pdf",
            version="draft", is_latest=False
        ))
        db_session.add(ProjectFile(
            id="legacy2", project_id=project["id"], name="brief.pdf",
            version="2.4", is_latest=True
        ))
        db_session.commit()

        new = upload(project["id"], ("brief.pdf", b"v")).json()["files"][0]

        assert new["version"] == "2.5"
        assert new["previous_version_id"] == "legacy2"

    def test_last_activity(self, client, make_project, upload):
        project = make_project()

        upload(project["id"], ("brief.pdf", b"v1"))
        single = client.get(f"/api/v1/projects/{project['id']}").json()["last_activity"]
        upload(project["id"], ("a.png", b"a"), ("b.png", b"b"))
        batch = client.get(f"/api/v1/projects/{project['id']}").json()["last_activity"]

        assert single == "brief.pdf v1.0 uploaded"
        assert batch == "2 files uploaded"

    def test_unknown_project(self, upload):
        assert upload(999, ("brief.pdf", b"v1")).status_code == 404


class TestPartialUpload:
    """A failing file stops the batch without undoing the files before it."""

    def test_failure_mid_batch(self, client, make_project, upload, storage):
        project = make_project()
        storage.fail_put_for.add("b.png")

        response = upload(project["id"], ("a.png", b"a"), ("b.png", b"b"), ("c.png", b"c"))

        assert response.status_code == 207
        body = response.json()
        assert body["uploaded"] == 1
        assert body["requested"] == 3
        assert "b.png" in body["error"]
        assert [f["name"] for f in files_of(client, project["id"])] == ["a.png"]
        assert len(storage.objects) == 1

    def test_failure_on_first_file(self, client, make_project, upload, storage):
        project = make_project()
        storage.fail_put_for.add("a.png")

        response = upload(project["id"], ("a.png", b"a"), ("b.png", b"b"))

        assert response.status_code == 502
        assert files_of(client, project["id"]) == []
        assert storage.objects == {}

    def test_failed_reupload_keeps_previous_latest(self, client, make_project, upload, storage):
        project = make_project()
        first = upload(project["id"], ("brief.pdf", b"v1")).json()["files"][0]
        storage.fail_put_for.add("brief.pdf")

        assert upload(project["id"], ("brief.pdf", b"v2")).status_code == 502

        listed = files_of(client, project["id"])
        assert len(listed) == 1
        assert listed[0]["id"] == first["id"]
        assert listed[0]["is_latest"] is True


class TestUploadDatabaseFailure:
    """When recording a file fails, its stored object is removed again."""

    def test_first_file_record_fails(self, client, make_project, upload, storage, monkeypatch):
        project = make_project()

        def failing_commit(session):
            raise SQLAlchemyError("connection lost")

        monkeypatch.setattr(Session, "commit", failing_commit)
        response = upload(project["id"], ("brief.pdf", b"v1"))
        monkeypatch.undo()

        assert response.status_code == 500
        assert len(storage.deleted) == 1
        assert storage.deleted[0].startswith(f"projects/{project['id']}/")
        assert storage.deleted[0].endswith("-brief.pdf")
        assert storage.objects == {}
        assert files_of(client, project["id"]) == []

    def test_later_file_record_fails(self, client, make_project, upload, storage, monkeypatch):
        project = make_project()
        original_commit = Session.commit
        commits = []

        def flaky_commit(session):
            commits.append(session)
            if len(commits) == 2:
                raise SQLAlchemyError("connection lost")
            return original_commit(session)

        monkeypatch.setattr(Session, "commit", flaky_commit)
        response = upload(project["id"], ("a.png", b"a"), ("b.png", b"b"))
        monkeypatch.undo()

        assert response.status_code == 207
        assert response.json()["uploaded"] == 1
        assert [key.rsplit("-", 1)[1] for key in storage.deleted] == ["b.png"]
        assert [key.rsplit("-", 1)[1] for key in storage.objects] == ["a.png"]
        assert [f["name"] for f in files_of(client, project["id"])] == ["a.png"]


class TestVersionHistory:
    """Tests for the per-name history endpoint."""

    def test_newest_first(self, client, make_project, upload):
        project = make_project()
        for body in (b"a", b"b", b"c"):
            upload(project["id"], ("cut.mp4", body))
        upload(project["id"], ("other.mp4", b"x"))

        response = client.get(
            f"/api/v1/files/project/{project['id']}/versions", params={"name": "cut.mp4"}
        )

        body = response.json()
        assert body["total"] == 3
        assert [f["version"] for f in body["files"]] == ["1.2", "1.1", "1.0"]

    def test_name_required(self, client, make_project):
        project = make_project()
        assert client.get(f"/api/v1/files/project/{project['id']}/versions").status_code == 422


class TestArchive:
    """Tests for downloading all project files as a ZIP."""

    def test_zip_contents(self, client, make_project, upload):
        project = make_project()
        upload(project["id"], ("brief.pdf", b"brief"), ("cut.mp4", b"video"))

        response = client.get(f"/api/v1/files/project/{project['id']}/archive")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/zip"
        assert "Acme_Co_Spring_Launch_Reel_Files.zip" in response.headers["content-disposition"]

        archive = zipfile.ZipFile(io.BytesIO(response.content))
        assert sorted(archive.namelist()) == [
            "Acme Co - Spring Launch Reel/1_brief.pdf",
            "Acme Co - Spring Launch Reel/2_cut.mp4",
        ]
        assert archive.read("Acme Co - Spring Launch Reel/2_cut.mp4") == b"video"

    def test_unreadable_files_skipped(self, client, make_project, upload, storage):
        project = make_project()
        upload(project["id"], ("brief.pdf", b"brief"), ("cut.mp4", b"video"))
        storage.fail_get_for.add("brief.pdf")

        response = client.get(f"/api/v1/files/project/{project['id']}/archive")

        archive = zipfile.ZipFile(io.BytesIO(response.content))
        assert archive.namelist() == ["Acme Co - Spring Launch Reel/2_cut.mp4"]

    def test_no_files(self, client, make_project):
        project = make_project()
        assert client.get(f"/api/v1/files/project/{project['id']}/archive").status_code == 404


class TestSingleFile:
    """Tests for file lookup, download links and deletion."""

    def test_get_and_download_url(self, client, make_project, upload):
        project = make_project()
        stored = upload(project["id"], ("brief.pdf", b"v1")).json()["files"][0]

        assert client.get(f"/api/v1/files/{stored['id']}").json()["name"] == "brief.pdf"

        link = client.get(f"/api/v1/files/{stored['id']}/download-url").json()
        assert link["file_id"] == stored["id"]
        assert link["presigned_url"] == f"https://signed.example/{stored['s3_key']}?expires=3600"
        assert link["expires_in"] == 3600

    def test_missing_file(self, client):
        assert client.get("/api/v1/files/nope").status_code == 404
        assert client.delete("/api/v1/files/nope").status_code == 404

    def test_delete_latest_does_not_promote(self, client, make_project, upload, storage):
        project = make_project()
        first = upload(project["id"], ("brief.pdf", b"v1")).json()["files"][0]
        second = upload(project["id"], ("brief.pdf", b"v2")).json()["files"][0]

        response = client.delete(f"/api/v1/files/{second['id']}")

        assert response.status_code == 204
        assert second["s3_key"] in storage.deleted
        remaining = files_of(client, project["id"])
        assert [f["id"] for f in remaining] == [first["id"]]
        assert remaining[0]["is_latest"] is False
        assert client.get(f"/api/v1/projects/{project['id']}").json()["last_activity"] == "File deleted"

        # Numbering continues from the surviving versions
        third = upload(project["id"], ("brief.pdf", b"v3")).json()["files"][0]
        assert third["version"] == "1.1"
        assert third["previous_version_id"] is None

    def test_storage_failure_keeps_record(self, client, make_project, upload, storage):
        project = make_project()
        stored = upload(project["id"], ("brief.pdf", b"v1")).json()["files"][0]
        storage.fail_delete = True

        response = client.delete(f"/api/v1/files/{stored['id']}")

        assert response.status_code == 502
        assert client.get(f"/api/v1/files/{stored['id']}").status_code == 200

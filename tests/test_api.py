"""
HTTP endpoint tests.
"""

from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from app import build_pipeline, create_app
from exceptions import FetchFailedError
from miners.github_miner import GitHubGraphQLMiner


@pytest.fixture
def client_factory(test_settings):
    """Build a test client whose miner talks to the given transport."""

    def _make(transport=None, miner=None, raise_server_exceptions=True, **overrides):
        app_settings = test_settings.model_copy(update=overrides)
        miner = miner or GitHubGraphQLMiner.from_settings(
            app_settings, transport=transport
        )
        pipeline = build_pipeline(app_settings, miner)
        return TestClient(
            create_app(app_settings, pipeline),
            raise_server_exceptions=raise_server_exceptions,
        )

    return _make


@pytest.fixture
def page(make_pr_node, make_page):
    return make_page(
        [
            make_pr_node(title="Fix bug", body="desc", comments=1),
            make_pr_node(title="WIP", body="", comments=0),
        ]
    )


def test_fetch_prs_success(client_factory, transport_factory, page, tmp_path):
    """Test a successful request writes the document and returns the records."""
    client = client_factory(transport_factory(page))

    response = client.post(
        "/fetch-prs",
        json={"repoUrl": "https://github.com/octocat/hello-world", "token": "t"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "PRs fetched successfully"
    assert body["filePath"] == str(
        tmp_path / "fetched-prs" / "octocat-hello-world-prs.json"
    )
    assert [pr["title"] for pr in body["prs"]] == ["Fix bug"]
    assert body["prs"][0]["files"][0]["changeType"] == "MODIFIED"


def test_fetch_prs_without_records(client_factory, transport_factory, page):
    """Test records are omitted when disabled in settings."""
    client = client_factory(transport_factory(page), include_prs_in_response=False)

    response = client.post("/fetch-prs", json={"repoUrl": "octocat/hello-world"})

    assert response.status_code == 200
    assert "prs" not in response.json()
    assert "filePath" in response.json()


def test_fetch_prs_missing_url(client_factory):
    """Test a missing repository URL is rejected."""
    miner = Mock()
    miner.fetch_all = AsyncMock()
    client = client_factory(miner=miner)

    response = client.post("/fetch-prs", json={"token": "t"})

    assert response.status_code == 400
    assert response.json() == {"error": "Repository URL is required"}
    miner.fetch_all.assert_not_called()


def test_fetch_prs_token_required(client_factory):
    """Test a missing token is rejected when tokens are required."""
    miner = Mock()
    miner.fetch_all = AsyncMock()
    client = client_factory(miner=miner, require_token=True)

    response = client.post("/fetch-prs", json={"repoUrl": "octocat/hello-world"})

    assert response.status_code == 400
    assert response.json() == {"error": "Repository URL and Token are required"}


def test_fetch_prs_token_required_uses_configured_token(
    client_factory, transport_factory, page
):
    """Test a configured token satisfies the token requirement."""
    client = client_factory(
        transport_factory(page),
        require_token=True,
        github_token=SecretStr("configured"),
    )

    response = client.post("/fetch-prs", json={"repoUrl": "octocat/hello-world"})

    assert response.status_code == 200


def test_fetch_prs_invalid_url(client_factory):
    """Test an unparsable URL returns the parser's message."""
    client = client_factory(miner=Mock())

    response = client.post("/fetch-prs", json={"repoUrl": "not-a-repo"})

    assert response.status_code == 500
    assert response.json() == {"error": "Invalid repository URL"}


def test_fetch_prs_fetch_failure(client_factory, tmp_path):
    """Test fetch failures return 500 and write nothing."""
    miner = Mock()
    miner.fetch_all = AsyncMock(side_effect=FetchFailedError("Bad credentials"))
    client = client_factory(miner=miner)

    response = client.post("/fetch-prs", json={"repoUrl": "octocat/hello-world"})

    assert response.status_code == 500
    assert response.json() == {"error": "Error fetching PRs: Bad credentials"}
    assert not (tmp_path / "fetched-prs").exists()


def test_fetch_prs_without_body(client_factory):
    """Test a request without a body is treated as a missing repository URL."""
    miner = Mock()
    miner.fetch_all = AsyncMock()
    client = client_factory(miner=miner)

    response = client.post("/fetch-prs")

    assert response.status_code == 400
    assert response.json() == {"error": "Repository URL is required"}
    miner.fetch_all.assert_not_called()


def test_fetch_prs_invalid_body(client_factory):
    """Test a wrongly typed field returns the error payload instead of a 422."""
    miner = Mock()
    miner.fetch_all = AsyncMock()
    client = client_factory(miner=miner)

    response = client.post("/fetch-prs", json={"repoUrl": 123})

    assert response.status_code == 400
    assert list(response.json()) == ["error"]
    assert response.json()["error"].startswith("Invalid request body: repoUrl")
    miner.fetch_all.assert_not_called()


def test_fetch_prs_malformed_graphql_node(
    client_factory, transport_factory, make_pr_node, make_page, tmp_path
):
    """Test a malformed pull request node returns a fetch error and writes nothing."""
    node = make_pr_node()
    del node["files"]["edges"][0]["node"]["path"]
    client = client_factory(transport_factory(make_page([node])))

    response = client.post("/fetch-prs", json={"repoUrl": "octocat/hello-world"})

    assert response.status_code == 500
    assert response.json()["error"].startswith("Error fetching PRs: ")
    assert not (tmp_path / "fetched-prs").exists()


def test_fetch_prs_unexpected_exception(client_factory):
    """Test an unexpected exception is returned as a 500 error payload."""
    miner = Mock()
    miner.fetch_all = AsyncMock(side_effect=RuntimeError("boom"))
    client = client_factory(miner=miner, raise_server_exceptions=False)

    response = client.post("/fetch-prs", json={"repoUrl": "octocat/hello-world"})

    assert response.status_code == 500
    assert response.json() == {"error": "boom"}


def test_health(client_factory):
    response = client_factory(miner=Mock()).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}

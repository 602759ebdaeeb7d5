import pytest

from mcp_jira.utils import is_atlassian_cloud_url, tenant_of, workspace_url


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://example.atlassian.net", True),
        ("https://example.jira.com", True),
        ("https://api.atlassian.com/ex/jira/123", True),
        ("https://jira.example.com", False),
        ("http://localhost:8080", False),
        ("http://192.168.1.10", False),
        ("http://10.0.0.1", False),
        ("http://172.20.0.1", False),
        (None, False),
        ("", False),
    ],
)
def test_is_atlassian_cloud_url(url, expected):
    assert is_atlassian_cloud_url(url) is expected


def test_workspace_url():
    assert workspace_url(" acme ") == "https://acme.atlassian.net"


def test_workspace_url_accepts_full_url():
    assert workspace_url("https://jira.example.com/") == "https://jira.example.com"


def test_workspace_url_empty():
    with pytest.raises(ValueError, match="must not be empty"):
        workspace_url("  ")


def test_tenant_of():
    assert tenant_of("https://ACME.atlassian.net/jira") == "acme.atlassian.net"

import logging

from mcp_jira.logging_config import (
    ContextualLogger,
    get_log_context,
    log_operation,
    setup_logger,
)


def test_setup_logger_returns_contextual_logger():
    logger = setup_logger("mcp-jira-test-setup", level="DEBUG")

    assert isinstance(logger, ContextualLogger)
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_setup_logger_replaces_handlers():
    setup_logger("mcp-jira-test-repeat")
    logger = setup_logger("mcp-jira-test-repeat")

    assert len(logger.handlers) == 1


def test_setup_logger_file_handler(tmp_path):
    logger = setup_logger("mcp-jira-test-file", log_to_file=True, log_dir=str(tmp_path))
    logger.info("hello")
    for handler in logger.handlers:
        handler.flush()

    log_file = tmp_path / "mcp-jira-test-file.log"
    assert log_file.exists()
    assert "hello" in log_file.read_text()
    assert "no-context" in log_file.read_text()


def test_log_operation_scopes_context(tmp_path):
    logger = setup_logger("mcp-jira-test-op", log_to_file=True, log_dir=str(tmp_path))

    with log_operation(logger, "create_issue", project="PROJ", trace_id="abc123"):
        assert get_log_context() == {
            "project": "PROJ",
            "operation": "create_issue",
            "trace_id": "abc123",
        }
        logger.info("inside")

    assert get_log_context() == {}
    for handler in logger.handlers:
        handler.flush()
    content = (tmp_path / "mcp-jira-test-op.log").read_text()
    assert "project=PROJ,operation=create_issue,trace_id=abc123" in content
    assert "Operation started: create_issue" in content


def test_set_and_clear_context():
    logger = setup_logger("mcp-jira-test-ctx")

    logger.set_context(user="me")
    assert get_log_context() == {"user": "me"}
    logger.clear_context()
    assert get_log_context() == {}

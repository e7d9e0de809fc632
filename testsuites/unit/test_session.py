import pytest

from testsuites.fakes import FakeDriver, FakeElement
from ui_foundation import (
    DocumentScope,
    InvalidConfigurationError,
    Locator,
    PageModel,
    RunConfiguration,
    Session,
)


class LandingPage(PageModel):
    URL_PATH = "/"


def test_session_requires_driver():
    with pytest.raises(InvalidConfigurationError):
        Session(None)


def test_session_defaults_to_empty_configuration(driver):
    session = Session(driver)

    assert isinstance(session.config, RunConfiguration)
    assert isinstance(session.document, DocumentScope)
    assert len(session.session_id) == 8


def test_document_scope_finds_through_driver(driver, session):
    node = driver.add(FakeElement("input", {"name": "q"}))

    assert session.document.find(Locator.name("q")) == [node]
    assert str(session.document) == "document"


def test_create_page_binds_session(session):
    page = session.create_page(LandingPage)

    assert isinstance(page, LandingPage)
    assert page.session is session


def test_navigation_properties(driver, session):
    driver.title = "Welcome"
    session.go_to_url("http://localhost/")

    assert session.title == "Welcome"
    assert session.current_url == "http://localhost/"
    assert driver.history == ["http://localhost/"]


def test_close_runs_once(driver):
    closed = []
    session = Session(driver, on_close=lambda: closed.append(True))

    with session:
        pass
    session.close()

    assert closed == [True]


def test_launch_rejects_internet_explorer():
    config = RunConfiguration({"browser": "ie"})

    with pytest.raises(InvalidConfigurationError, match="Internet Explorer"):
        Session.launch(config)


def test_sessions_are_isolated():
    first = Session(FakeDriver())
    second = Session(FakeDriver())

    assert first.document.driver is not second.document.driver
    assert first.session_id != second.session_id

"""Shared fixtures: an app on in-memory SQLite and a course builder."""

from __future__ import annotations

from typing import Optional

import pytest
from flask_jwt_extended import create_access_token

from subpage import create_app
from subpage.application.subpage.load_page import LoadedSubpage, load_page
from subpage.extensions import db
from subpage.host.sections import create_section
from subpage.models.course import Course
from subpage.models.course_module import CourseModule
from subpage.models.course_section import CourseSection
from subpage.models.subpage import Subpage
from subpage.models.subpage_section import SubpageSection

JWT_TEST_KEY = "subpage-tests-jwt-secret-key-0123456789abcdef"


@pytest.fixture
def app(tmp_path):
    """Application with a fresh schema and a per-test upload folder."""
    app = create_app(
        "testing",
        UPLOAD_FOLDER=str(tmp_path / "uploads"),
        JWT_SECRET_KEY=JWT_TEST_KEY,
    )
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def session(app):
    return db.session


@pytest.fixture
def registry(app):
    """Registries with a well-behaved and a failing module type."""
    registry = app.extensions["subpage"]
    registry.modules.register("forum", lambda instance, context: True)
    registry.modules.register("quiz", lambda instance, context: False)
    return registry


class Builder:
    """Creates host records (courses, sections, modules) and subpages."""

    def __init__(self, session):
        self.session = session

    def course(self, *, fmt: str = "topics", numsections: int = 3) -> Course:
        course = Course()
        course.fullname = "Test course"
        course.shortname = "TC"
        course.format = fmt
        course.numsections = numsections
        self.session.add(course)
        self.session.flush()

        for number in range(numsections + 1):
            create_section(course_id=course.id, section_number=number, session=self.session)

        self.session.commit()
        return course

    def section(self, course: Course, number: int) -> CourseSection:
        section = create_section(course_id=course.id, section_number=number, session=self.session)
        self.session.commit()
        return section

    def module(
        self,
        course: Course,
        section_id: str,
        *,
        modname: str = "forum",
        name: str = "Forum",
        instance: Optional[str] = None,
    ) -> CourseModule:
        cm = CourseModule()
        cm.course_id = course.id
        cm.section_id = section_id
        cm.modname = modname
        cm.instance = instance or f"{modname}-instance"
        cm.name = name
        self.session.add(cm)
        self.session.flush()

        section = self.session.get(CourseSection, section_id)
        section.sequence = list(section.sequence or []) + [cm.id]
        self.session.commit()
        return cm

    def subpage(self, course: Course, *, name: str = "Subpage", intro: Optional[str] = None) -> LoadedSubpage:
        subpage = Subpage()
        subpage.course_id = course.id
        subpage.name = name
        subpage.intro = intro
        self.session.add(subpage)
        self.session.flush()

        general = create_section(course_id=course.id, section_number=0, session=self.session)
        cm = self.module(course, general.id, modname="subpage", name=name, instance=subpage.id)
        return load_page(cmid=cm.id, session=self.session)

    def link(self, loaded: LoadedSubpage, number: int, pageorder: int) -> CourseSection:
        """Place a section with a chosen number on a subpage, bypassing allocation."""
        section = create_section(course_id=loaded.course.id, section_number=number, session=self.session)
        link = SubpageSection()
        link.subpage_id = loaded.id
        link.section_id = section.id
        link.pageorder = pageorder
        self.session.add(link)
        self.session.commit()
        return section


@pytest.fixture
def build(session):
    return Builder(session)


@pytest.fixture
def auth_headers(app):
    def make(role: str = "editingteacher", identity: str = "teacher-1", **claims):
        token = create_access_token(
            identity=identity,
            additional_claims={"role": role, **claims},
        )
        return {"Authorization": f"Bearer {token}"}
    return make


@pytest.fixture
def client(app):
    return app.test_client()

from typing import Dict, Optional
from sqlalchemy import select
from subpage.extensions import db
from subpage.domain.numbering import in_subpage_band
from subpage.domain.registry import SectionNamingRegistry, default_section_name
from subpage.models.course_module import CourseModule
from subpage.utils.text import format_string
from .list_sections import SectionEntry, list_sections
from .load_page import LoadedSubpage

ANOTHER_SECTION = "Another section"
NEW_SECTION = "New section"
SECTION = "Section"
COURSE_MAIN_PAGE = "Course main page"
SUBPAGE = "Subpage"

MOVE_TO = "to"
MOVE_FROM = "from"


def _check_move(move):
    if move not in (MOVE_TO, MOVE_FROM):
        raise ValueError(f"move must be '{MOVE_TO}' or '{MOVE_FROM}', got {move!r}")


def moveable_modules(
    *,
    subpage: LoadedSubpage,
    all_subpages: Optional[Dict[str, LoadedSubpage]],
    course_sections,
    move: str,
    naming: SectionNamingRegistry,
    session=None,
) -> Dict[int, dict]:
    """
    Modules that can be moved in this situation, grouped by section number.

    move == "to": modules in course sections that belong to no subpage,
    i.e. candidates for moving onto this subpage.
    move == "from": modules in this subpage's own sections.

    Each group is ``{"section": name, "pageorder": n, "mods": {cmid: name}}``.
    The subpage's own course module is never offered.
    """
    _check_move(move)
    session = session or db.session

    if all_subpages and move == MOVE_TO:
        subsections = {}
        for sub in all_subpages.values():
            for entry in list_sections(subpage_id=sub.id, session=session):
                subsections[entry.id] = entry
        sections = [SectionEntry(record=section) for section in course_sections]
    else:
        sections = list_sections(subpage_id=subpage.id, session=session)
        subsections = {entry.id: entry for entry in sections}

    allmods = {
        cm.id: cm
        for cm in session.execute(
            select(CourseModule).where(CourseModule.course_id == subpage.course.id)
        ).scalars()
    }

    mods: Dict[int, dict] = {}
    for entry in sections:
        if not entry.sequence:
            continue
        if move == MOVE_TO and entry.id in subsections:
            continue

        position = entry.pageorder if entry.pageorder is not None else entry.number
        if move == MOVE_TO:
            name = naming.section_name(subpage.course, entry.record, position)
        else:
            name = default_section_name(entry.record, position)

        for cmid in entry.sequence:
            if cmid not in allmods or cmid == subpage.cm.id:
                continue
            group = mods.setdefault(entry.number, {
                "section": name,
                "pageorder": position,
                "mods": {},
            })
            group["mods"][cmid] = format_string(allmods[cmid].name)

    return mods


def _section_label(entry: SectionEntry) -> str:
    return entry.name or f"{SECTION} {entry.pageorder}"


def destination_options(
    *,
    subpage: LoadedSubpage,
    all_subpages: Optional[Dict[str, LoadedSubpage]],
    course_sections,
    move: str,
    naming: SectionNamingRegistry,
    session=None,
) -> Dict[str, Dict[str, str]]:
    """
    Grouped destinations for moving modules, as ``{group: {value: label}}``.

    Values are ``"<cmid>,<section id>"``, ``"<cmid>,new"`` for a fresh
    section on that subpage, or ``"course,<section id>"`` for a section of
    the course main page. Only ``move == "from"`` offers other subpages and
    the course main page.
    """
    _check_move(move)
    session = session or db.session

    options: Dict[str, Dict[str, str]] = {}

    sections = list_sections(subpage_id=subpage.id, session=session)
    if sections:
        group = options.setdefault(ANOTHER_SECTION, {})
        for entry in sections:
            group[f"{subpage.cm.id},{entry.id}"] = _section_label(entry)
        group[f"{subpage.cm.id},new"] = NEW_SECTION

    if move != MOVE_FROM:
        return options

    for sub in (all_subpages or {}).values():
        if sub.cm.id == subpage.cm.id:
            continue
        group = options[f"{SUBPAGE}: {sub.name}"] = {}
        sub_sections = list_sections(subpage_id=sub.id, session=session)
        if sub_sections:
            for entry in sub_sections:
                group[f"{sub.cm.id},{entry.id}"] = _section_label(entry)
            group[f"{sub.cm.id},new"] = NEW_SECTION

    course = subpage.course
    for section in course_sections or []:
        if in_subpage_band(section.section) or section.section > course.numsections:
            continue
        main = options.setdefault(COURSE_MAIN_PAGE, {})
        main[f"course,{section.id}"] = naming.section_name(course, section)

    return options

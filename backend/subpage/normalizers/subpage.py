from .section import normalize_section

def normalize_subpage(loaded, sections=None, admin=False):
    data = {
        "cmid": loaded.cm.id,
        "id": loaded.id,
        "course_id": loaded.course.id,
        "name": loaded.name,
        "intro": loaded.intro if loaded.has_intro else None,
        "intro_format": loaded.intro_format,
    }

    if sections is not None:
        # Stealth sections are only shown to editors
        visible = sections if admin else [s for s in sections if not s.stealth]
        data["sections"] = [
            normalize_section(s, admin=admin) for s in visible
        ]

    return data

from subpage.domain.registry import SectionNamingRegistry


def topics_section_name(course, section):
    if section.name:
        return section.name
    if section.section == 0:
        return "General"
    return f"Topic {section.section}"


def register_builtin_formats(naming: SectionNamingRegistry):
    naming.register("topics", topics_section_name)
    return naming

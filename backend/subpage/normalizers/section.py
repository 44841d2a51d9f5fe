def normalize_section(entry, admin=False):
    data = {
        "id": entry.id,
        "section": entry.number,
        "name": entry.name,
        "summary": entry.summary or "",
        "pageorder": entry.pageorder,
        "modules": list(entry.sequence),
    }

    if admin:
        data["stealth"] = entry.stealth

    return data

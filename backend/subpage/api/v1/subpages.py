# subpage/api/v1/subpages.py
from flask import request, jsonify, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity
from subpage.application.subpage.add_section import add_section
from subpage.application.subpage.delete_section import delete_section
from subpage.application.subpage.list_sections import list_sections
from subpage.application.subpage.load_page import load_page, list_course_subpages
from subpage.application.subpage.move_options import (
    MOVE_FROM,
    MOVE_TO,
    destination_options,
    moveable_modules,
)
from subpage.application.subpage.move_section import move_section
from subpage.application.subpage.section_state import is_section_empty, set_section_stealth
from subpage.domain.exceptions import NotFoundError
from subpage.domain.registry import current_registry
from subpage.host.sections import list_course_sections
from subpage.normalizers.subpage import normalize_subpage
from subpage.utils.decorators import roles_required, course_scoped
from . import v1_bp

EDITING_ROLES = ("editingteacher", "manager")


def _linked_entry(loaded, section_id):
    for entry in list_sections(subpage_id=loaded.id):
        if entry.id == section_id:
            return entry
    raise NotFoundError(f"Section {section_id} is not on subpage {loaded.cm.id}")


def _move_arg():
    move = request.args.get("move", MOVE_TO)
    if move not in (MOVE_TO, MOVE_FROM):
        return None
    return move


# ------------------------
# Subpages
# ------------------------

@v1_bp.route("/subpages/<cmid>", methods=["GET"])
@jwt_required()
@roles_required(*EDITING_ROLES)
@course_scoped
def get_subpage(cmid):
    loaded = load_page(cmid=cmid)
    sections = list_sections(subpage_id=loaded.id)

    return jsonify(normalize_subpage(loaded, sections=sections, admin=True)), 200


@v1_bp.route("/courses/<course_id>/subpages", methods=["GET"])
@jwt_required()
@roles_required(*EDITING_ROLES)
@course_scoped
def list_subpages(course_id):
    subpages = list_course_subpages(course_id=course_id)

    return jsonify({
        "data": [normalize_subpage(loaded) for loaded in subpages.values()]
    }), 200


# ------------------------
# Sections
# ------------------------

@v1_bp.route("/subpages/<cmid>/sections", methods=["POST"])
@jwt_required()
@roles_required(*EDITING_ROLES)
@course_scoped
def create_section(cmid):
    loaded = load_page(cmid=cmid)
    data = request.get_json(silent=True) or {}

    added = add_section(
        subpage_id=loaded.id,
        actor_id=get_jwt_identity(),
        name=data.get("name"),
        summary=data.get("summary"),
    )

    return jsonify({
        "subpage_section_id": added.link_id,
        "section_id": added.section_id,
        "section": added.section_number,
        "pageorder": added.pageorder,
    }), 201


@v1_bp.route("/subpages/<cmid>/sections/<section_id>/move", methods=["PATCH"])
@jwt_required()
@roles_required(*EDITING_ROLES)
@course_scoped
def reorder_section(cmid, section_id):
    loaded = load_page(cmid=cmid)
    data = request.get_json(silent=True) or {}

    if "pageorder" not in data:
        return jsonify({"error": "pageorder is required"}), 400

    move_section(
        subpage_id=loaded.id,
        section_id=section_id,
        pageorder=data["pageorder"],
    )

    sections = list_sections(subpage_id=loaded.id)
    return jsonify(normalize_subpage(loaded, sections=sections, admin=True)), 200


@v1_bp.route("/subpages/<cmid>/sections/<section_id>/stealth", methods=["PUT"])
@jwt_required()
@roles_required(*EDITING_ROLES)
@course_scoped
def update_section_stealth(cmid, section_id):
    loaded = load_page(cmid=cmid)
    data = request.get_json(silent=True) or {}

    if not isinstance(data.get("stealth"), bool):
        return jsonify({"error": "stealth must be a boolean"}), 400

    _linked_entry(loaded, section_id)
    set_section_stealth(section_id=section_id, stealth=data["stealth"])

    return jsonify({"section_id": section_id, "stealth": data["stealth"]}), 200


@v1_bp.route("/subpages/<cmid>/sections/<section_id>", methods=["DELETE"])
@jwt_required()
@roles_required(*EDITING_ROLES)
@course_scoped
def remove_section(cmid, section_id):
    loaded = load_page(cmid=cmid)

    warnings = delete_section(
        subpage_id=loaded.id,
        section_id=section_id,
        actor_id=get_jwt_identity(),
    )

    return jsonify({
        "section_id": section_id,
        "warnings": [w.to_dict() for w in warnings],
    }), 200


@v1_bp.route("/subpages/<cmid>/sections/<section_id>/empty", methods=["GET"])
@jwt_required()
@roles_required(*EDITING_ROLES)
@course_scoped
def section_empty(cmid, section_id):
    loaded = load_page(cmid=cmid)
    _linked_entry(loaded, section_id)

    return jsonify({
        "section_id": section_id,
        "empty": is_section_empty(course_id=loaded.course.id, section_id=section_id),
    }), 200


# ------------------------
# Moving modules
# ------------------------

@v1_bp.route("/subpages/<cmid>/destinations", methods=["GET"])
@jwt_required()
@roles_required(*EDITING_ROLES)
@course_scoped
def get_destinations(cmid):
    move = _move_arg()
    if move is None:
        return jsonify({"error": "move must be 'to' or 'from'"}), 400

    loaded = load_page(cmid=cmid)
    options = destination_options(
        subpage=loaded,
        all_subpages=list_course_subpages(course_id=loaded.course.id),
        course_sections=list_course_sections(course_id=loaded.course.id),
        move=move,
        naming=current_registry().naming,
    )

    return jsonify({"move": move, "options": options}), 200


@v1_bp.route("/subpages/<cmid>/moveable", methods=["GET"])
@jwt_required()
@roles_required(*EDITING_ROLES)
@course_scoped
def get_moveable_modules(cmid):
    move = _move_arg()
    if move is None:
        return jsonify({"error": "move must be 'to' or 'from'"}), 400

    loaded = load_page(cmid=cmid)
    mods = moveable_modules(
        subpage=loaded,
        all_subpages=list_course_subpages(course_id=loaded.course.id),
        course_sections=list_course_sections(course_id=loaded.course.id),
        move=move,
        naming=current_registry().naming,
    )

    current_app.logger.debug(f"{len(mods)} sections with moveable modules for subpage {cmid}")

    # JSON object keys must be strings
    return jsonify({
        "move": move,
        "sections": {str(number): group for number, group in sorted(mods.items())},
    }), 200

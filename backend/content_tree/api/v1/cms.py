# content_tree/api/v1/cms.py
from flask import g, request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity
from content_tree.utils.decorators import tenant_required, roles_required, feature_enabled
from content_tree.application.cms.save_elements import save_elements
from content_tree.application.cms.delete_element import delete_element
from content_tree.application.cms.duplicate_element import duplicate_element
from content_tree.application.cms.save_sections import save_sections
from content_tree.application.cms.delete_section import delete_section
from content_tree.application.cms.duplicate_section import duplicate_section
from content_tree.application.cms.convert_section_to_block import convert_section_to_block
from content_tree.application.cms.create_page import create_page
from content_tree.application.cms.create_block import create_block
from content_tree.application.cms.load_tree import (
    load_element,
    load_section_tree,
    load_page_tree,
    load_block_tree,
    list_blocks_by_type,
)
from content_tree.normalizers.element import normalize_element, normalize_element_tree
from content_tree.normalizers.section import normalize_section, normalize_section_tree
from content_tree.normalizers.page import normalize_page
from content_tree.normalizers.block import normalize_block, normalize_block_tree
from . import v1_bp # import the versioned blueprint


def _json_list():
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ValueError("Invalid payload")
    return data

# ------------------------
# Elements
# ------------------------

@v1_bp.route("/elements", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("cms")
def save_elements_route():
    saved = save_elements(
        tenant_id=g.current_tenant.id,
        actor_id=get_jwt_identity(),
        nodes=_json_list(),
    )
    return jsonify([normalize_element(e) for e in saved]), 200

@v1_bp.route("/elements/<element_id>", methods=["GET"])
@jwt_required()
@tenant_required
@feature_enabled("cms")
def get_element(element_id):
    element = load_element(tenant_id=g.current_tenant.id, element_id=element_id)
    return jsonify(normalize_element(element, admin=True))

@v1_bp.route("/elements/<element_id>", methods=["DELETE"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("cms")
def delete_element_route(element_id):
    result = delete_element(
        tenant_id=g.current_tenant.id,
        actor_id=get_jwt_identity(),
        element_id=element_id,
    )
    return jsonify(result), 200

@v1_bp.route("/elements/<element_id>/duplicate", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("cms")
def duplicate_element_route(element_id):
    clone = duplicate_element(
        tenant_id=g.current_tenant.id,
        actor_id=get_jwt_identity(),
        element_id=element_id,
    )
    return jsonify(normalize_element_tree(clone)), 201

# ------------------------
# Sections
# ------------------------

@v1_bp.route("/sections", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("cms")
def save_sections_route():
    saved = save_sections(
        tenant_id=g.current_tenant.id,
        actor_id=get_jwt_identity(),
        sections=_json_list(),
    )
    return jsonify([normalize_section(s) for s in saved]), 200

@v1_bp.route("/sections/<section_id>/tree", methods=["GET"])
@jwt_required()
@tenant_required
@feature_enabled("cms")
def get_section_tree(section_id):
    tree = load_section_tree(tenant_id=g.current_tenant.id, section_id=section_id)
    return jsonify(normalize_section_tree(tree))

@v1_bp.route("/sections/<section_id>", methods=["DELETE"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("cms")
def delete_section_route(section_id):
    result = delete_section(
        tenant_id=g.current_tenant.id,
        actor_id=get_jwt_identity(),
        section_id=section_id,
    )
    return jsonify(result), 200

@v1_bp.route("/sections/<section_id>/duplicate", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("cms")
def duplicate_section_route(section_id):
    target_block_id = request.args.get("convert_to_block")

    if target_block_id:
        block_tree = convert_section_to_block(
            tenant_id=g.current_tenant.id,
            actor_id=get_jwt_identity(),
            section_id=section_id,
            target_block_id=target_block_id,
        )
        return jsonify(normalize_block_tree(block_tree)), 201

    clone = duplicate_section(
        tenant_id=g.current_tenant.id,
        actor_id=get_jwt_identity(),
        section_id=section_id,
    )
    return jsonify(normalize_section_tree(clone)), 201

@v1_bp.route("/sections/<section_id>/convert-to-block", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("cms")
def convert_section_route(section_id):
    data = request.get_json(silent=True) or {}

    block_tree = convert_section_to_block(
        tenant_id=g.current_tenant.id,
        actor_id=get_jwt_identity(),
        section_id=section_id,
        target_block_id=data.get("block_id"),
        name=data.get("name"),
    )
    return jsonify(normalize_block_tree(block_tree)), 201

# ------------------------
# Pages
# ------------------------

@v1_bp.route("/pages", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("cms")
def create_page_route():
    page = create_page(
        tenant_id=g.current_tenant.id,
        actor_id=get_jwt_identity(),
        data=request.get_json(silent=True) or {},
    )
    return jsonify(normalize_page(page)), 201

@v1_bp.route("/pages/<page_id>/tree", methods=["GET"])
@jwt_required()
@tenant_required
@feature_enabled("cms")
def get_page_tree(page_id):
    page, sections = load_page_tree(tenant_id=g.current_tenant.id, page_id=page_id)
    return jsonify(normalize_page(page, sections=sections))

# ------------------------
# Blocks
# ------------------------

@v1_bp.route("/blocks", methods=["POST"])
@jwt_required()
@tenant_required
@roles_required("admin")
@feature_enabled("cms")
def create_block_route():
    block = create_block(
        tenant_id=g.current_tenant.id,
        actor_id=get_jwt_identity(),
        data=request.get_json(silent=True) or {},
    )
    return jsonify(normalize_block(block)), 201

@v1_bp.route("/blocks/<block_id>/tree", methods=["GET"])
@jwt_required()
@tenant_required
@feature_enabled("cms")
def get_block_tree(block_id):
    tree = load_block_tree(tenant_id=g.current_tenant.id, block_id=block_id)
    return jsonify(normalize_block_tree(tree))

@v1_bp.route("/blocks/type/<block_type>", methods=["GET"])
@jwt_required()
@tenant_required
@feature_enabled("cms")
def list_blocks_by_type_route(block_type):
    blocks = list_blocks_by_type(tenant_id=g.current_tenant.id, block_type=block_type)
    return jsonify([normalize_block(b) for b in blocks])

from flask import jsonify
from content_tree.domain.invariants.exceptions import InvariantViolation, NodeNotFound

def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        response = jsonify({
            "error": type(error).__name__,
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(NodeNotFound)
    def handle_node_not_found(error):
        response = jsonify({
            "error": "NodeNotFound",
            "message": str(error)
        })
        response.status_code = 404
        return response

    @app.errorhandler(ValueError)
    def handle_value_error(error):
        response = jsonify({
            "error": "ValidationError",
            "message": str(error)
        })
        response.status_code = 400
        return response

from flask import jsonify

def jerror(status: int, code: str, message: str, details=None):
    payload = {"code": code, "message": message, "error": message}
    if details:
        payload["details"] = details
    return jsonify(payload), status

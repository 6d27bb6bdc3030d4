from flask import request


def request_data() -> dict:
    """JSON body if the client sent one, otherwise the submitted form."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()

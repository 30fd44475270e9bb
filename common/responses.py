from rest_framework.response import Response


#utility classes and functions to facilitate having consistent api responses
class SuccessResponse(Response):
    def __init__(self, data=None, message=None, status=200, **kwargs):
        resp = {"status": "success", "data": data, "message": message, "success": True}
        super().__init__(data=resp, status=status, **kwargs)


class ErrorResponse(Response):
    def __init__(self, data=None, message=None, status=400, **kwargs):
        resp = {"status": "error", "data": data, "error": message, "success": False}
        super().__init__(data=resp, status=status, **kwargs)


def format_first_error(errors, with_key=True):
    """
    Formats the first message in a serializer.errors as a single readable string

    Parameters:
    errors: The error messages of a serializer i.e serializer.errors
    with_key: prefix the message with the name of the offending field
    """
    if isinstance(errors, list):
        return format_first_error(errors[0], with_key) if errors else ""
    if not isinstance(errors, dict):
        return str(errors)
    field, error_list = next(iter(errors.items()))
    if isinstance(error_list, list) and error_list and not isinstance(error_list[0], (dict, list)):
        if field == "non_field_errors" or not with_key:
            return str(error_list[0])
        return f"({field}) {error_list[0]}"
    return format_first_error(error_list, with_key)

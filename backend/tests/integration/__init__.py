"""
Integration tests package.

Contains integration tests that run the whole application stack, from the
Flask routes down to the HTTP gateway, against a fake booking backend.
"""

from http_contract.recv.arrows import (
    Header,
    Served,
    code,
    header,
    recv,
    recv_bytes,
    served,
    served_form,
    served_json,
)

__all__ = [
    "Header",
    "Served",
    "code",
    "header",
    "recv",
    "recv_bytes",
    "served",
    "served_form",
    "served_json",
]

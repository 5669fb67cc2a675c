from http_contract.send.arrows import (
    Header,
    accept,
    accept_json,
    accept_form,
    authorization,
    bearer,
    content,
    content_form,
    content_json,
    delete,
    get,
    head,
    header,
    keep_alive,
    params,
    patch,
    post,
    put,
    send,
    url,
)

__all__ = [
    "Header",
    "accept",
    "accept_form",
    "accept_json",
    "authorization",
    "bearer",
    "content",
    "content_form",
    "content_json",
    "delete",
    "get",
    "head",
    "header",
    "keep_alive",
    "params",
    "patch",
    "post",
    "put",
    "send",
    "url",
]

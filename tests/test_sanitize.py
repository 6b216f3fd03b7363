from __future__ import annotations

from nanobanana.utils import sanitize_message


def test_sanitize_strips_absolute_paths() -> None:
    message = "[Errno 2] No such file or directory: '/home/alice/pics/cat.png'"
    assert sanitize_message(message) == "[Errno 2] No such file or directory: '<path>'"


def test_sanitize_strips_windows_paths() -> None:
    assert "Users" not in sanitize_message(r"cannot open C:\Users\alice\cat.png now")


def test_sanitize_keeps_mime_types_and_urls() -> None:
    message = "unsupported image/png from https://generativelanguage.googleapis.com/v1beta"
    assert sanitize_message(message) == message


def test_sanitize_strips_credentials() -> None:
    key = "AIza" + "B" * 35
    assert sanitize_message(f"bad key {key}") == "bad key ***"
    assert sanitize_message("token my-secret rejected", ["my-secret"]) == "token *** rejected"


def test_sanitize_never_returns_empty() -> None:
    assert sanitize_message("") == "Internal error."

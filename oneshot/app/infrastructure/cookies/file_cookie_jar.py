"""Cookie jar persisted to a file in the Netscape (curl) cookie format.

Jar I/O problems never fail a transfer: they are logged and the request goes
on with whatever cookies could be read.
"""
from __future__ import annotations

import os
from http.cookiejar import MozillaCookieJar

from loguru import logger

from oneshot.app.core import SERVICE_NAME


def load_cookie_jar(path: str) -> MozillaCookieJar:
    """Open the jar at ``path``; a missing, empty or unreadable file gives an empty jar."""
    jar = MozillaCookieJar(path)
    if os.path.isfile(path) and os.path.getsize(path) > 0:
        try:
            jar.load(ignore_discard=True, ignore_expires=False)
        except OSError as exc:
            # LoadError is an OSError. Unreadable jars are replaced on the next save, as curl does.
            logger.bind(service_name=SERVICE_NAME, event="cookie_jar_not_loaded", path=path).warning(
                "{}", exc
            )
    return jar


def save_cookie_jar(jar: MozillaCookieJar) -> None:
    """Write the jar back to its file; a write failure is logged and the response kept."""
    try:
        # Session cookies are kept so a later request sharing the path still sends them.
        jar.save(ignore_discard=True, ignore_expires=False)
    except OSError as exc:
        logger.bind(service_name=SERVICE_NAME, event="cookie_jar_not_saved", path=jar.filename).warning(
            "{}", exc
        )

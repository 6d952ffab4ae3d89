from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.orm import Session, sessionmaker

from storefront.services.audit_service import report_exception

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostCommitTask:
    name: str
    run: Callable[[Session], None]


def run_post_commit_tasks(session_factory: sessionmaker, tasks: list[PostCommitTask], *, context: dict) -> int:
    """Run side effects of a committed order, each in its own session.

    A failing task is rolled back and reported; the rest still run.
    Returns the number of tasks that completed.
    """
    completed = 0
    for task in tasks:
        try:
            with session_factory() as db:
                task.run(db)
                db.commit()
        except Exception as exc:
            report_exception(exc, operation=task.name, context=context)
            continue
        completed += 1
        logger.debug('Post-commit task %s done for %s', task.name, context)
    return completed

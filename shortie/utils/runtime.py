"""Detect where the handlers run.

`APP_ENV=local` marks a developer machine, and SAM CLI sets `AWS_SAM_LOCAL=true`
inside the containers it starts for `sam local invoke` / `sam local start-api`.
"""

import os

from shortie.constants import ENV


def running_locally() -> bool:
    """True on a developer machine or under SAM CLI, False in AWS."""
    if os.getenv(ENV.App.AWS_SAM_LOCAL, '').lower() == 'true':
        return True
    return os.getenv(ENV.App.APP_ENV, '').lower() == 'local'

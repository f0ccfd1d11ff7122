import random

from flask import current_app


def init_random_source(app):
    seed = app.config.get("RANDOM_SEED")
    if seed is None:
        source = random.SystemRandom()
    else:
        source = random.Random(seed)
    app.extensions["random_source"] = source


def get_random_source():
    """Source used for every tie-break and appointment draw.

    Anything exposing ``choice``, ``shuffle`` and ``sample`` with the
    ``random.Random`` signatures can be installed in its place.
    """
    return current_app.extensions["random_source"]

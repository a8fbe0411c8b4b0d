import operator


def identity_presence(key, view):
    return key


def window_presence(key_equal=operator.eq):
    """Presence that only holds while the focused row is resident.

    Scrolling the focused row out of the window reports ``None``; scrolling
    back reports the key again, since the engine still remembers it.
    """

    def project(key, view):
        if key is None or view is None:
            return None
        return key if view.contains_key(key, key_equal) else None

    return project


def frame_presence(df):
    """Presence that holds while ``key`` is still a row label of ``df``."""

    def project(key, view):
        if key is None:
            return None
        return key if key in df.index else None

    return project

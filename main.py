import logging
import sys

from collated_view import collate
from config_paths import load_config
from default_df_initializer import DefaultDfInitializer
from file_type_handler import FileTypeHandler, UnsupportedFileType
from focus_engine import FocusEngine
from pagination import Paginator
from presence import frame_presence
from status_bar import render_status

try:
    from _version import __version__
except Exception:
    __version__ = "0.0.0"


USAGE = (
    "rowfocus - replay row-focus navigation over a table\n\n"
    "Usage:\n"
    "  rowfocus [-d] [--filter EXPR] [--sort COL] [--index COL] [path] ACTION...\n"
    "  rowfocus -v\n\n"
    "Actions: down up pgdn pgup unfocus select:KEY scroll:PX\n"
)

SIMPLE_ACTIONS = {
    "down": "focus_down",
    "up": "focus_up",
    "pgdn": "page_down",
    "pgup": "page_up",
    "unfocus": "unfocus",
}

VALUE_FLAGS = {"--filter": "filter", "--sort": "sort", "--index": "index_col"}


def parse_args(args):
    opts = {
        "debug": False,
        "filter": None,
        "sort": None,
        "index_col": None,
        "path": None,
        "actions": [],
    }
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "-d":
            opts["debug"] = True
        elif arg in VALUE_FLAGS:
            if i + 1 >= len(args):
                raise ValueError(f"{arg} requires a value")
            opts[VALUE_FLAGS[arg]] = args[i + 1]
            i += 1
        elif opts["path"] is None and not opts["actions"] and "." in arg and ":" not in arg:
            opts["path"] = arg
        else:
            parse_action(arg)
            opts["actions"].append(arg)
        i += 1
    return opts


def parse_action(token):
    if token in SIMPLE_ACTIONS:
        return token, None
    name, sep, value = token.partition(":")
    if sep and name == "select" and value:
        return name, value
    if sep and name == "scroll":
        try:
            return name, int(value)
        except ValueError:
            pass
    raise ValueError(f"Unknown action: {token}")


def resolve_key(df, text):
    for label in df.index:
        if str(label) == text:
            return label
    return text


class Replay:
    """Drives a FocusEngine over a simulated viewport, one action at a time."""

    def __init__(self, df, cfg, filter=None, order=None):
        self.df = df
        self.filter = filter
        self.order = order
        self.cfg = cfg
        total = collate(df, filter=filter, order=order, rank_range=(0, 0)).num_filtered
        self.pager = Paginator(
            total,
            row_height=cfg["ROW_HEIGHT"],
            viewport_height=cfg["VIEWPORT_HEIGHT"],
            header_height=cfg["HEADER_HEIGHT"],
            preload_rows=cfg["PRELOAD_ROWS"],
        )
        self.changes = []
        self.last_scroll = None
        self.engine = FocusEngine(
            cfg["ROW_HEIGHT"],
            on_focus_change=self.changes.append,
            on_scroll=self._on_scroll,
            presence=frame_presence(df),
        )
        self.refresh()

    def _on_scroll(self, intent):
        self.last_scroll = intent
        self.pager.apply_scroll_intent(intent)

    def refresh(self):
        view = collate(
            self.df,
            filter=self.filter,
            order=self.order,
            rank_range=(self.pager.page_start, self.pager.page_end),
        )
        self.engine.update(
            view=view,
            visible_range=self.pager.visible_range,
            header_height=self.pager.header_height,
        )

    def run(self, token):
        name, value = parse_action(token)
        self.last_scroll = None
        if name == "scroll":
            self.pager.scroll_to(value)
        elif name == "select":
            self.engine.focus(resolve_key(self.df, value))
        else:
            getattr(self.engine, SIMPLE_ACTIONS[name])()
        self.refresh()
        return self.context(token)

    def context(self, action):
        current = self.engine.model.current
        return {
            "action": action,
            "focused": self.engine.visually_focused_key,
            "presence": self.engine.focused_presence,
            "index": None if current is None else current.index,
            "visible_range": self.pager.visible_range,
            "window_start": self.pager.page_start,
            "window_end": self.pager.page_end,
            "total_rows": self.pager.total_rows,
            "scroll": self.last_scroll,
        }


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)

    if "-v" in args or "-V" in args:
        print(__version__)
        return 0

    if "-h" in args:
        print(USAGE)
        return 0

    try:
        opts = parse_args(args)
    except ValueError as exc:
        print(f"{exc}\n\n{USAGE}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if opts["debug"] else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if opts["path"]:
            df = FileTypeHandler(opts["path"], index_col=opts["index_col"]).load()
        else:
            df = DefaultDfInitializer().create()
    except (UnsupportedFileType, ValueError, OSError) as exc:
        print(f"Load failed: {exc}", file=sys.stderr)
        return 1

    cfg = load_config()
    try:
        replay = Replay(df, cfg, filter=opts["filter"], order=opts["sort"])
    except Exception as exc:
        print(f"Collate failed: {exc}", file=sys.stderr)
        return 1

    width = cfg["STATUS_WIDTH"]
    print(render_status(replay.context("start"), width).rstrip())
    for token in opts["actions"]:
        print(render_status(replay.run(token), width).rstrip())
    return 0


if __name__ == "__main__":
    sys.exit(main())

def _fmt_key(key):
    return "-" if key is None else str(key)


def render_status(context, width):
    """
    context keys: action, focused, presence, index, visible_range,
                  window_start, window_end, total_rows, scroll
    """
    action = context.get("action") or ""
    focused = _fmt_key(context.get("focused"))
    presence = _fmt_key(context.get("presence"))
    index = context.get("index")
    index_text = "" if index is None else f"@{index}"
    first, last = context.get("visible_range", (0, 0))
    window_start = context.get("window_start", 0)
    window_end = context.get("window_end", window_start)
    total_rows = context.get("total_rows", 0)

    text = (
        f" {action:<10} | focus {focused}{index_text} | presence {presence}"
        f" | rows {first}-{last} of {total_rows} | window {window_start}-{window_end}"
    )
    scroll = context.get("scroll")
    if scroll is not None:
        text += f" | scroll {scroll.anchor} {scroll.y_px}px"

    return text.ljust(width)[:width]

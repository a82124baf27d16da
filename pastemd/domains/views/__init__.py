from pastemd.domains.views.services import ViewCounter, ViewMode, parse_view_mode, view_key

__all__ = ["ViewCounter", "ViewMode", "parse_view_mode", "view_key"]

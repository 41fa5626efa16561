from .reconcile_flow import reconcile_files

__all__ = ["reconcile_files"]

from pastemd.domains.identity.entities import MANAGE_PASTES, Identity, may_bypass_password

__all__ = ["Identity", "MANAGE_PASTES", "may_bypass_password"]

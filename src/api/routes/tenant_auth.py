from src.api.routes.auth import create_auth_router
from src.domain.entities import AccountType

router = create_auth_router(AccountType.tenant_account, "/auth/tenants/{context_id}")

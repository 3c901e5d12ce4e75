from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from messmate.core.security import actor_id_from_token
from messmate.core.exceptions import UnauthorizedException
from messmate.database import get_db
from messmate.ledger.contracts import MembershipTenantResolver, StaticActorProvider
from messmate.ledger.remote import RemoteLedgerStore
from messmate.models.tenant_context import TenantContext
from messmate.models.user import User
from messmate.repositories.ledger_table_repository import SqlAlchemyPersistenceClient
from messmate.repositories.record_repository import RecordRepository
from messmate.repositories.user_repository import UserRepository
from messmate.services.group_service import GroupService
from messmate.services.guest_sessions import guest_sessions

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def authenticate(credentials: HTTPAuthorizationCredentials) -> str:
    """Validate the bearer token and return the actor id (JWT 'sub')."""
    try:
        return actor_id_from_token(credentials.credentials)
    except UnauthorizedException as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security), db: Session = Depends(get_db)
) -> User:
    """
    FastAPI dependency to validate JWT and get/create user.

    Flow:
    1. Extract token from Authorization: Bearer <token>
    2. Validate JWT using shared SECRET_KEY
    3. Extract auth_user_id from 'sub' claim
    4. Get or auto-create User record
    5. Return User object for use in endpoints

    Raises:
        HTTPException 401: If token invalid or expired
    """
    auth_user_id = authenticate(credentials)
    return UserRepository(db).get_or_create_by_auth_id(auth_user_id)


async def get_tenant_context(
    user: User = Depends(get_current_user), db: Session = Depends(get_db)
) -> TenantContext:
    """
    FastAPI dependency resolving the caller's group.

    Raises:
        NotFoundException: If the caller does not belong to a group
    """
    return GroupService(db).get_context(user)


async def get_record_repository(
    x_guest_session: str | None = Header(None),
    credentials: HTTPAuthorizationCredentials | None = Depends(optional_security),
    db: Session = Depends(get_db),
) -> RecordRepository:
    """
    FastAPI dependency selecting the ledger backend for this request.

    - X-Guest-Session header: the guest session's ephemeral ledger
    - Bearer token: a remote ledger scoped to the actor's group, loaded fresh

    Raises:
        NotFoundException: If the guest session does not exist
        HTTPException 401: If neither a guest session nor a valid token is given
    """
    if x_guest_session:
        return guest_sessions.get(x_guest_session)

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    actor_id = authenticate(credentials)
    store = RemoteLedgerStore(
        actor_provider=StaticActorProvider(actor_id),
        tenant_resolver=MembershipTenantResolver(db),
        client=SqlAlchemyPersistenceClient(db),
    )
    repository = RecordRepository(store)
    await repository.load()
    return repository

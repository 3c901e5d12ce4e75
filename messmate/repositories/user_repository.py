from sqlalchemy.orm import Session
from messmate.models.user import User


class UserRepository:
    """
    Actors known to the service.

    A row only maps a token subject to an integer key for memberships;
    credentials live with the token issuer.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_by_auth_id(self, auth_user_id: str) -> User | None:
        """Actor for a token subject, if it has been seen before"""
        return self.db.query(User).filter_by(auth_user_id=auth_user_id).first()

    def get_or_create_by_auth_id(self, auth_user_id: str) -> User:
        """
        Actor for a token subject, registering it on first sight.

        Group endpoints call this so an actor can create or join a group on
        its first request. Ledger reads go through ``get_by_auth_id`` instead:
        an unseen actor has no group and gets nothing registered.
        """
        user = self.get_by_auth_id(auth_user_id)
        if user is None:
            user = User(auth_user_id=auth_user_id)
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
        return user

    def get_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

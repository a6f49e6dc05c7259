"""Grant (or revoke) the admin role on an existing profile, looked up by e-mail.

Usage:
    python -m scripts.promote_admin <email> [--revoke]

Requires DATABASE_BACKEND=firestore and Firebase service account credentials.
The user must have signed in at least once so that a profile exists.
"""

import asyncio
import sys

from newsecho.core.config import get_settings
from newsecho.domain.enums import UserRole
from newsecho.infrastructure.firebase import close_firebase, get_firestore_client, init_firebase
from newsecho.infrastructure.firebase.repositories import FirestoreUserRepository


async def main() -> None:
    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    if len(args) != 1:
        print("Usage: python -m scripts.promote_admin <email> [--revoke]", file=sys.stderr)
        sys.exit(1)
    email = args[0].strip().lower()
    role = UserRole.USER if "--revoke" in sys.argv else UserRole.ADMIN

    settings = get_settings()
    if settings.database_backend != "firestore":
        print("promote_admin only makes sense against Firestore", file=sys.stderr)
        sys.exit(1)
    if not init_firebase():
        print("Could not initialize Firestore (check service account settings)", file=sys.stderr)
        sys.exit(1)

    try:
        users = FirestoreUserRepository(get_firestore_client())
        matches = [u for u in await users.list_all() if u.email.lower() == email]
        if not matches:
            print(f"No profile found for {email}", file=sys.stderr)
            sys.exit(1)
        for profile in matches:
            await users.update_fields(profile.id, {"role": role.value})
            print(f"{profile.id} ({profile.email}) -> {role.value}")
    finally:
        await close_firebase()


if __name__ == "__main__":
    asyncio.run(main())

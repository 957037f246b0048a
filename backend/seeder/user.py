#!/usr/bin/env python3

import getpass
import sys

from sqlalchemy.orm import Session

from database import SessionLocal, engine
from models import Base
from models.user import User, UserRole
from schemas.user import UserCreate
from services.user_service import UserService
from utils.exceptions import ConflictError


ROLE_CHOICES = {
    "1": UserRole.ADMIN,
    "2": UserRole.MAINTENANCE,
    "3": UserRole.FACULTY_STAFF,
}


def get_user_input():
    """Get user input for account creation"""
    print("=== Initial Account Creation ===")
    print()

    while True:
        name = input("User name: ").strip()
        if not name:
            print("User name is required!")
            continue
        break

    while True:
        department = input("Department: ").strip()
        if not department:
            print("Department is required!")
            continue
        break

    while True:
        password = getpass.getpass("Password (min 8 characters): ")
        if len(password) < 8:
            print("Password must be at least 8 characters long!")
            continue

        confirm_password = getpass.getpass("Confirm password: ")
        if password != confirm_password:
            print("Passwords don't match!")
            continue
        break

    print("\nRole:")
    print("1. Admin")
    print("2. Maintenance")
    print("3. Faculty/Staff")
    while True:
        choice = input("Select role (1-3): ").strip()
        if choice in ROLE_CHOICES:
            role = ROLE_CHOICES[choice]
            break
        print("Please select 1, 2 or 3!")

    return {
        "name": name,
        "department": department,
        "password": password,
        "role": role,
    }


def create_admin_user(db: Session, user_data: dict) -> User:
    """Create the account, raising ValueError when the name is taken"""
    try:
        return UserService.create_user(db, UserCreate(**user_data))
    except ConflictError:
        raise ValueError(
            f"User with name '{user_data['name']}' already exists!"
        )


def main():
    """Main function for user seeder"""
    try:
        Base.metadata.create_all(bind=engine)

        user_data = get_user_input()

        db = SessionLocal()
        try:
            user = create_admin_user(db, user_data)

            print("\n" + "=" * 50)
            print("✅ User created successfully!")
            print("=" * 50)
            print(f"ID: {user.id}")
            print(f"Name: {user.name}")
            print(f"Department: {user.department}")
            print(f"Role: {user.role.value}")
            print(f"Created: {user.created_at}")
            print("=" * 50)
            print("\n✅ The user can now login to the system!")

        except ValueError as e:
            print(f"\n❌ Error: {e}")
            sys.exit(1)
        finally:
            db.close()

    except KeyboardInterrupt:
        print("\n\n❌ Operation cancelled by user.")
        sys.exit(1)
    except Exception as e:
        print(f"\n❌ Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

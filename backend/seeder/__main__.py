import sys

from seeder.demo import main as demo_main
from seeder.status import main as status_main
from seeder.user import main as user_main

USAGE = """Usage: python -m seeder <command>
Available commands:
  user    Create a user account (interactive)
  status  Seed the default ticket statuses
  demo    Seed sample departments, categories, assets and users"""


def main():
    if len(sys.argv) < 2:
        print(USAGE)
        sys.exit(1)

    command = sys.argv[1]

    if command == "user":
        user_main()
    elif command == "status":
        status_main()
    elif command == "demo":
        demo_main()
    else:
        print(f"Unknown command: {command}")
        print(USAGE)
        sys.exit(1)


if __name__ == "__main__":
    main()

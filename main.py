"""
Entry point for the ToDo Resource Service
"""

from todo_service.cli import main

if __name__ == "__main__":
    main()

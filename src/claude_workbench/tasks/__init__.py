"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus) + swimlane grouping
- task_parser.py: defensive parsing of one task JSON file
- task_aggregator.py: watched, debounced, deduplicated view over all sessions
"""

# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for everything else. Only the names below are read.
"""

# Example: run headless (print live updates only, no prompt)
# CONSOLE_ENABLED = False

# Example: fixed copy targets for /copy and /folders
# WORKSPACE_FOLDERS = [
#     "~/src/my-project",
#     "~/src/other-project",
# ]

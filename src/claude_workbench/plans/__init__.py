"""
Plan subsystem.

Components:
- plan_models.py: Plan
- plan_parser.py: title extraction + reading one Markdown plan
- plan_aggregator.py: watched view over the plans directory, newest first, with search
"""

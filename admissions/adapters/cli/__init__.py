"""Command-line interface adapters.

Provides CLI commands for the admissions portal:
- register / login / logout / whoami: Account and session handling
- submit / my_application: Applicant actions
- list / summary / details / update_status: Administrator review
"""

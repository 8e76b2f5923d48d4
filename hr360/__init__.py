"""
HR360
Backend for the HR dashboard and candidate portal.

Architecture:
- PostgreSQL: Structured records (applicants, employees, jobs, grievances, ...)
- MongoDB: Documents (AI flow outputs, raw resumes, assessment sessions)
- Hosted LLM: AI flows with validated JSON input/output
"""

__version__ = "1.0.0"

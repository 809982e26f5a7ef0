"""Job descriptions keyed by the role value the application form submits."""

ROLE_LABELS = {
    "frontend": "Frontend Engineer",
    "backend": "Backend Engineer",
    "fullstack": "Fullstack Engineer",
    "devops": "DevOps Engineer",
    "ai_engineer": "AI Engineer",
}

JOB_DESCRIPTIONS = {
    "frontend": """Frontend Engineer
We are hiring a Frontend Engineer to build and maintain our recruiter and candidate web apps.
Requirements:
- 3+ years building production web applications with React and TypeScript.
- Strong HTML, CSS and accessibility fundamentals; experience with Tailwind or CSS-in-JS.
- Experience consuming REST/JSON APIs and managing client state.
- Familiarity with testing tools (Jest, Testing Library, Playwright).
Nice to have: Next.js, design systems, performance profiling.""",
    "backend": """Backend Engineer
We are hiring a Backend Engineer to own the services behind our hiring platform.
Requirements:
- 4+ years building backend services in Python, Node.js or Go.
- Solid SQL and relational data modelling (PostgreSQL, SQLite).
- Designing and operating REST APIs, authentication and background processing.
- Writing automated tests and reviewing code.
Nice to have: message queues, caching, observability tooling.""",
    "fullstack": """Fullstack Engineer
We are hiring a Fullstack Engineer to ship features end to end.
Requirements:
- 3+ years across React/TypeScript frontends and Python or Node.js backends.
- Comfortable with SQL databases, REST APIs and deployment pipelines.
- Product sense and ability to work directly with recruiters and designers.
Nice to have: Next.js, Docker, cloud hosting experience.""",
    "devops": """DevOps Engineer
We are hiring a DevOps Engineer to run our cloud infrastructure.
Requirements:
- 3+ years operating production systems on AWS, GCP or Azure.
- Infrastructure as code (Terraform), containers (Docker) and Kubernetes.
- CI/CD pipelines, monitoring, alerting and incident response.
- Scripting in Bash and Python.
Nice to have: cost optimisation, security hardening, SRE practices.""",
    "ai_engineer": """AI Engineer
We are hiring an AI Engineer to build LLM-powered features.
Requirements:
- 2+ years shipping machine learning or LLM applications in Python.
- Prompt design, structured outputs, retrieval (RAG) and evaluation of model quality.
- Experience with model provider APIs and vector databases.
- Solid software engineering: APIs, testing, deployment.
Nice to have: fine-tuning, MLOps, data pipelines.""",
}


def get_job_description_text(role_key: str | None) -> str | None:
    """Job description for a role key, or None when the role is unknown or absent."""
    if not role_key:
        return None
    return JOB_DESCRIPTIONS.get(role_key)


def role_options() -> list[dict]:
    """Role filter options for the dashboard, 'all' first."""
    return [{"value": "all", "label": "All Roles"}] + [
        {"value": key, "label": label} for key, label in ROLE_LABELS.items()
    ]

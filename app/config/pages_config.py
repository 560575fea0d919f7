"""
Pages and Roles Configuration
This config defines the gated pages of the console and the capability flags
each seeded role gets on them.
Used by the seed script to populate/update pages, roles and role_permissions.
"""

# Capability flags stored on every role_permissions row
CAPABILITY_FLAGS = ["can_view", "can_add", "can_edit", "can_delete", "can_print"]

# Gated pages, keyed by page code
PAGES = {
    "dashboard": {
        "name": "Dashboard",
        "description": "Summary of projects and documents"
    },
    "projects": {
        "name": "Projects",
        "description": "Project tracking"
    },
    "documents": {
        "name": "Documents",
        "description": "Project documents"
    },
    "profile": {
        "name": "Profile",
        "description": "Own user profile"
    },
    "roles": {
        "name": "Roles & Access",
        "description": "User role management"
    }
}

# Flags granted per role on every page
ROLE_TEMPLATES = {
    "admin": {
        "flags": ["can_view", "can_add", "can_edit", "can_delete", "can_print"],
        "description": "Full access to every page"
    },
    "editor": {
        "flags": ["can_view", "can_add", "can_edit", "can_print"],
        "description": "Create and edit content, no deletes"
    },
    "viewer": {
        "flags": ["can_view"],
        "description": "Read-only access"
    }
}

# Pages a role template does not reach
ROLE_PAGE_EXCLUSIONS = {
    "editor": ["roles"],
    "viewer": ["roles"]
}


def get_page_matrix():
    """
    Returns a dictionary with all pages, roles and their per-page flags
    Format: {
        "pages": [
            {"code": "projects", "name": "Projects", "description": "..."},
            ...
        ],
        "roles": [
            {
                "name": "editor",
                "description": "...",
                "permissions": {
                    "projects": {"can_view": True, "can_add": True, ...},
                    ...
                }
            },
            ...
        ]
    }
    """
    pages = [
        {"code": code, "name": page["name"], "description": page["description"]}
        for code, page in PAGES.items()
    ]

    roles = []
    for role_name, template in ROLE_TEMPLATES.items():
        excluded = ROLE_PAGE_EXCLUSIONS.get(role_name, [])
        permissions = {}
        for code in PAGES:
            if code in excluded:
                continue
            permissions[code] = {flag: flag in template["flags"] for flag in CAPABILITY_FLAGS}

        roles.append({
            "name": role_name,
            "description": template["description"],
            "permissions": permissions
        })

    return {
        "pages": pages,
        "roles": roles
    }


# Export the matrix for use in seed scripts
PAGE_MATRIX = get_page_matrix()

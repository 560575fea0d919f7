"""
Seed Pages and Roles Script
This script populates the pages, roles and role_permissions tables using the config.
Can be run manually after provisioning a new Supabase project.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from app.config.pages_config import PAGE_MATRIX, CAPABILITY_FLAGS
from app.database.supabase_client import SupabaseClient
from supabase import Client
from typing import Dict
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def seed_pages(supabase: Client) -> Dict[str, str]:
    """Seed pages from config; returns page code -> page id"""
    logger.info("Seeding pages...")

    page_ids = {}
    created_count = 0
    updated_count = 0

    for page in PAGE_MATRIX["pages"]:
        try:
            existing = supabase.table("pages")\
                .select("id")\
                .eq("code", page["code"])\
                .execute()

            if existing.data:
                supabase.table("pages")\
                    .update({
                        "name": page["name"],
                        "description": page["description"]
                    })\
                    .eq("code", page["code"])\
                    .execute()
                page_ids[page["code"]] = existing.data[0]["id"]
                updated_count += 1
                logger.debug(f"Updated page: {page['code']}")
            else:
                result = supabase.table("pages").insert({
                    "code": page["code"],
                    "name": page["name"],
                    "description": page["description"]
                }).execute()
                page_ids[page["code"]] = result.data[0]["id"]
                created_count += 1
                logger.debug(f"Created page: {page['code']}")
        except Exception as e:
            logger.error(f"Error processing page {page['code']}: {e}")

    logger.info(f"Pages seeded: {created_count} created, {updated_count} updated")
    return page_ids


def seed_roles(supabase: Client, page_ids: Dict[str, str]) -> int:
    """Seed roles and their per-page flags from config"""
    logger.info("Seeding roles...")

    created_count = 0
    updated_count = 0

    for role in PAGE_MATRIX["roles"]:
        try:
            existing = supabase.table("roles")\
                .select("id")\
                .eq("name", role["name"])\
                .execute()

            if existing.data:
                supabase.table("roles")\
                    .update({"description": role["description"]})\
                    .eq("name", role["name"])\
                    .execute()
                role_id = existing.data[0]["id"]
                updated_count += 1
            else:
                result = supabase.table("roles").insert({
                    "name": role["name"],
                    "description": role["description"]
                }).execute()
                role_id = result.data[0]["id"]
                created_count += 1

            assign_page_permissions(supabase, role_id, role["name"], role["permissions"], page_ids)
        except Exception as e:
            logger.error(f"Error processing role {role['name']}: {e}")

    logger.info(f"Roles seeded: {created_count} created, {updated_count} updated")
    return created_count + updated_count


def assign_page_permissions(supabase: Client, role_id: str, role_name: str, permissions: dict, page_ids: Dict[str, str]):
    """Upsert one role_permissions row per page for the role"""
    rows = []
    for page_code, flags in permissions.items():
        page_id = page_ids.get(page_code)
        if page_id is None:
            logger.warning(f"Page {page_code} not seeded; skipping for role {role_name}")
            continue
        row = {"role_id": role_id, "page_id": page_id}
        row.update({flag: bool(flags.get(flag)) for flag in CAPABILITY_FLAGS})
        rows.append(row)

    if not rows:
        logger.warning(f"No page permissions for role {role_name}")
        return

    supabase.table("role_permissions")\
        .upsert(rows, on_conflict="role_id,page_id")\
        .execute()
    logger.debug(f"Assigned {len(rows)} page permissions to role {role_name}")


def main():
    """Main function to seed pages and roles"""
    try:
        supabase = SupabaseClient.get_service_client()

        logger.info("Starting pages and roles seeding...")

        page_ids = seed_pages(supabase)
        role_count = seed_roles(supabase, page_ids)

        logger.info("Seeding completed successfully!")
        logger.info(f"Total: {len(page_ids)} pages, {role_count} roles processed")

    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Seed script for the Recovery Tracker database.
This script populates the database with the default coping-tool catalog.
"""

import sys
from app import create_app
from extensions import db
from models import init_default_coping_tools, CopingTool

def seed_coping_tools():
    """Seed the database with the default coping tools."""
    print("🌱 Starting database seeding...")

    # Create Flask app context
    app = create_app()

    with app.app_context():
        try:
            # Create all tables if they don't exist
            db.create_all()
            print("✅ Database tables created/verified")

            initial_count = CopingTool.query.count()
            print(f"📊 Current coping tools in database: {initial_count}")

            print("🔄 Adding default coping tools...")
            added_count = init_default_coping_tools()
            final_count = CopingTool.query.count()

            print(f"✅ Seeding completed successfully!")
            print(f"📈 Added {added_count} new coping tools")
            print(f"📊 Total coping tools in database: {final_count}")

            print("\n📋 Coping tools in database:")
            for tool in CopingTool.query.order_by(CopingTool.title).all():
                marker = " (mandatory)" if tool.is_mandatory else ""
                print(f"   • {tool.title} - {tool.duration}{marker}")

        except Exception as e:
            app.logger.error(f"Seeding failed: {e}")
            print(f"❌ Error during seeding: {e}")
            db.session.rollback()
            sys.exit(1)

def main():
    """Main function to handle command line arguments."""
    if len(sys.argv) > 1:
        if sys.argv[1] == '--help' or sys.argv[1] == '-h':
            print("Recovery Tracker Database Seeder")
            print("Usage:")
            print("  python seed.py         - Seed default coping tools")
            print("  python seed.py --help  - Show this help message")
            return
        else:
            print(f"❌ Unknown argument: {sys.argv[1]}")
            print("Use 'python seed.py --help' for usage information")
            sys.exit(1)

    # Default action: seed the database
    seed_coping_tools()

if __name__ == '__main__':
    main()

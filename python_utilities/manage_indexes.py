#!/usr/bin/env python3
"""
Firestore Index Inspection for the Words Collection

Lookups only run single-field queries (`words ==`, `plural ==`,
`combinations array-contains-any`), which Firestore's automatic indexes
serve. This tool lists the database's composite indexes and shows what a
stored word was indexed under.

Usage:
    # List all composite indexes of the database
    python manage_indexes.py list

    # Show the stored index fields of one word document
    python manage_indexes.py check "hot under the collar"

Note: Uses your gcloud auth credentials (run 'gcloud auth application-default login' first)
"""

import argparse
import os

from google.cloud import firestore_admin_v1

# Configuration
PROJECT_ID = os.environ.get("GCLOUD_PROJECT", os.environ.get("GOOGLE_CLOUD_PROJECT"))
DATABASE_ID = os.environ.get("FIRESTORE_DATABASE_ID", "(default)")
WORDS_COLLECTION = os.environ.get("WORDS_COLLECTION", "words")


def get_client():
    """Get Firestore Admin client."""
    return firestore_admin_v1.FirestoreAdminClient()


def collection_parent(collection_name: str) -> str:
    return f"projects/{PROJECT_ID}/databases/{DATABASE_ID}/collectionGroups/{collection_name}"


def describe_field(field) -> str:
    IndexField = firestore_admin_v1.Index.IndexField
    if field.order:
        return f"{field.field_path} ({IndexField.Order(field.order).name})"
    if field.array_config:
        return f"{field.field_path} (array)"
    return field.field_path


def list_indexes(client=None):
    """List all composite indexes."""
    client = client or get_client()
    parent = collection_parent("-")

    print(f"Listing indexes for {PROJECT_ID}/{DATABASE_ID}...\n")

    try:
        found = False
        for index in client.list_indexes(parent=parent):
            found = True
            collection = index.name.split("/collectionGroups/")[1].split("/indexes/")[0]
            state = firestore_admin_v1.Index.State(index.state).name

            print(f"Collection: {collection}")
            print(f"  State: {state}")
            print(f"  Fields: {', '.join(describe_field(field) for field in index.fields)}")
            print()

        if not found:
            print("No composite indexes found (lookups don't need any).")
    except Exception as e:
        print(f"Error listing indexes: {e}")


def check_word(phrase: str, collection_name: str = WORDS_COLLECTION, db=None) -> bool:
    """Print the index fields stored for one word document; False if it's missing."""
    if db is None:
        from google.cloud import firestore

        db = firestore.Client(project=PROJECT_ID, database=DATABASE_ID)

    doc = db.collection(collection_name).document(phrase).get()

    if not doc.exists:
        print(f"'{phrase}' is not stored in {collection_name}")
        return False

    data = doc.to_dict()
    combinations = data.get("combinations", [])
    print(f"  {doc.id}")
    print(f"    Types: {', '.join(data.get('types', [])) or '-'}")
    print(f"    Plural: {data.get('plural') or '-'}")
    print(f"    Combinations ({len(combinations)}): {', '.join(combinations[:10])}")
    if len(combinations) > 10:
        print(f"      ... and {len(combinations) - 10} more")
    return True


def main():
    parser = argparse.ArgumentParser(description="Firestore Words Index Inspection")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # List command
    subparsers.add_parser("list", help="List all composite indexes")

    # Check command
    check_parser = subparsers.add_parser("check", help="Show a stored word's index fields")
    check_parser.add_argument("phrase", help="Canonical phrase (document id)")
    check_parser.add_argument("--collection", default=WORDS_COLLECTION, help="Collection name")

    args = parser.parse_args()

    if args.command == "list":
        list_indexes()
    elif args.command == "check":
        check_word(args.phrase, args.collection)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()

"""Sample model text shown when the viewer first opens."""

DEFAULT_MODEL = """\
model
  schema 1.1

type user

type organization
  relations
    define owner: [user]
    define admin: [user] or owner
    define member: [user] or admin

type folder
  relations
    define org: [organization]
    define owner: [user]
    define editor: [user, organization#member]
    define viewer: [user, organization#member] or editor or owner

type document
  relations
    define org: [organization]
    define parent: [folder]
    define owner: [user]
    define editor: [user, user with time_valid] or owner
    define viewer: [user, organization#member] or editor
    define commenter: [user] or viewer
    define parent_viewer: viewer from parent

condition time_valid(current_time: timestamp, expiry_time: timestamp) {
  current_time < expiry_time
}
"""

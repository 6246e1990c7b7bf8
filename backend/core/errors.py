"""
core/errors.py
--------------
Exceptions raised by the skill store and the GitHub mirror.
API routes catch these and map them to HTTP status codes:

  InvalidSkillName / InvalidSkillPath  -> 400
  SkillExists                          -> 409
  SkillNotFound / SkillFileNotFound    -> 404 (500 for delete-skill)
  MirrorError                          -> 500

Owner: Core team
Depends on: nothing
"""


class SkillError(Exception):
    """Base class for skill store failures."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidSkillName(SkillError):
    def __init__(self, message: str = "Invalid skill name"):
        super().__init__(message)


class InvalidSkillPath(SkillError):
    def __init__(self, message: str = "Invalid path"):
        super().__init__(message)


class SkillExists(SkillError):
    def __init__(self, name: str):
        self.name = name
        super().__init__("Skill already exists")


class SkillNotFound(SkillError):
    def __init__(self, name: str):
        self.name = name
        super().__init__("Skill not found")


class SkillFileNotFound(SkillError):
    def __init__(self, path: str):
        self.path = path
        super().__init__("File not found")


class MirrorError(Exception):
    """
    Raised when the GitHub contents API answers a mutating call with a
    non-success status. The status code and response body are kept verbatim.
    """
    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"GitHub API error ({status_code}): {body}")

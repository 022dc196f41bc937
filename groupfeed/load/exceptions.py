class GroupAlreadyExistsError(Exception):
    """A group with the same Facebook id is already stored."""

    def __init__(self, fb_id: str):
        super().__init__(f"Group {fb_id} already exists")
        self.fb_id = fb_id

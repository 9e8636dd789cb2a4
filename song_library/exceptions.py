from fastapi import HTTPException, status


class SongNotFound(HTTPException):
    """Exception raised when no song has the requested id"""

    def __init__(self, song_id: int):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Song not found"
        )
        self.song_id = song_id


class InvalidSongId(HTTPException):
    """Exception raised when the song id in the path is missing or not a number"""

    def __init__(self, detail: str = "Invalid song ID"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )


class SongIdMissing(InvalidSongId):
    """Exception raised when the play path carries no id at all"""

    def __init__(self):
        super().__init__(detail="Song ID missing")

from pydantic import BaseModel


class MongoCredentials(BaseModel):
    database_url: str
    database_name: str = "plagiarism_db"
    collection_name: str = "documents"
    username: str = ""
    password: str = ""


class RapidApiCredentials(BaseModel):
    api_key: str

# tidbit_client/models/page_models.py

from pydantic import BaseModel, Field
from typing import List, Optional

from .. import config

class Page(BaseModel):
    """
    Display areas of one client page.

    An area set to None is absent from the page; bootstrap uses that to
    decide which actions to bind.
    """
    path: str
    status: Optional[str] = Field(None, description="User-visible status line.")
    login_control: bool = False
    session_info: Optional[str] = None
    doc_list: Optional[List[str]] = None

def index_page() -> Page:
    """Unauthenticated landing page: login control plus status line."""
    return Page(path=config.INDEX_PAGE, status="", login_control=True)

def dashboard_page() -> Page:
    """Authenticated landing page: session info and document list areas."""
    return Page(path=config.DASHBOARD_PAGE, session_info="", doc_list=[])

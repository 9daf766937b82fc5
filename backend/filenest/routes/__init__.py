from .auth import router as auth
from .files import router as files
from .share_links import router as share_links
from .download import router as download
from .notes import router as notes

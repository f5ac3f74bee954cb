"""Server run script."""

import uvicorn
from hatchery.api.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "hatchery.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )

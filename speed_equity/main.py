# speed_equity/main.py

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv
import logging
import os

# ---------------- ENV ----------------
load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), ".env"))

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger("speed_equity")

app = FastAPI(title="Speed Equity Backend")

# ---------------- CORS ----------------
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

frontend_origin = os.getenv("FRONTEND_ORIGIN")
if frontend_origin:
    origins.append(frontend_origin)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------- DATABASE INIT ----------------
from speed_equity.database import Base, engine  # noqa: E402
from speed_equity.models.user import User, RevokedToken  # noqa: E402,F401
from speed_equity.models.project import Project, ProjectMember  # noqa: E402,F401
from speed_equity.models.projection import Projection, MemberProjection  # noqa: E402,F401
from speed_equity.models.daily_entry import DailyEntry  # noqa: E402,F401

logger.info("Checking database models...")
Base.metadata.create_all(bind=engine)
logger.info("Database ready.")

# ---------------- ROUTERS ----------------
from speed_equity.auth.auth_router import router as auth_router  # noqa: E402
from speed_equity.project.project_router import router as project_router  # noqa: E402
from speed_equity.projection.projection_router import router as projection_router  # noqa: E402
from speed_equity.checkin.checkin_router import router as checkin_router  # noqa: E402
from speed_equity.dashboard.dashboard_router import router as dashboard_router  # noqa: E402

app.include_router(auth_router, prefix="/auth")
# the rest carry their own prefix
app.include_router(project_router)
app.include_router(projection_router)
app.include_router(checkin_router)
app.include_router(dashboard_router)


# ---------------- ROOT ----------------
@app.get("/")
def read_root():
    return {"message": "Backend running successfully"}

import logging
import sys

from fastapi import FastAPI, Response, status
from pydantic import BaseModel, EmailStr

logging.basicConfig(stream=sys.stdout, level=logging.INFO, format="%(asctime)sZ %(levelname)s %(message)s")

app = FastAPI(title="Mail Relay Mock", version="1.0.0")


class SendEmail(BaseModel):
    to: EmailStr
    subject: str
    body: str
    html: str = ""


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.post("/send", status_code=status.HTTP_202_ACCEPTED)
async def send(payload: SendEmail) -> Response:
    logging.info("MAIL-MOCK send to=%s subject=%r body=%r html_len=%d", payload.to, payload.subject, payload.body, len(payload.html))
    return Response(status_code=status.HTTP_202_ACCEPTED)

from datetime import datetime, timezone
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
import logging

from config import API_TITLE, LOG_LEVEL
from main import batch_calculate_time_metrics, calculate_time_metrics
from models.schema import (
    BatchTimeCalculationRequest,
    BatchTimeCalculationResponse,
    DailySummaryRequest,
    DailySummaryResponse,
    TimeCalculationRequest,
    TimeCalculationResponse,
    WeeklySummaryRequest,
    WeeklySummaryResponse,
)
from utils.helper import InvalidInputError
from utils.summary import summarize_day, summarize_week

logging.basicConfig(level=LOG_LEVEL)

app = FastAPI(title=API_TITLE)


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    logging.warning(f"Rejected {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.get("/", response_class=PlainTextResponse)
def index():
    return "Punch Metrics API is running"


@app.post("/api/calculate-time", response_model=TimeCalculationResponse)
def calculate_time(body: TimeCalculationRequest):
    logging.info(f"Time calculation: punchIn={body.punch_in} punchOut={body.punch_out} schedule={body.schedule}")
    metrics = calculate_time_metrics(body.punch_in, body.punch_out, body.schedule)
    return TimeCalculationResponse(data=metrics)


@app.post("/api/calculate-time-batch", response_model=BatchTimeCalculationResponse)
def calculate_time_batch(body: BatchTimeCalculationRequest):
    logging.info(f"Batch time calculation for {len(body.attendance_records)} records")
    results = batch_calculate_time_metrics(body.attendance_records, body.schedule)
    return BatchTimeCalculationResponse(data=results)


@app.post("/api/daily-summary", response_model=DailySummaryResponse)
def daily_summary(body: DailySummaryRequest):
    results = batch_calculate_time_metrics(body.records, body.schedule)
    summary = summarize_day(body.user_id, body.day, [r.metrics for r in results if r.metrics is not None])
    errors = [r.calculation_error for r in results if r.calculation_error is not None]
    logging.info(f"Daily summary for user {body.user_id} on {body.day}: {len(results) - len(errors)} records, {len(errors)} skipped")
    return DailySummaryResponse(data=summary, errors=errors)


@app.post("/api/weekly-summary", response_model=WeeklySummaryResponse)
def weekly_summary(body: WeeklySummaryRequest):
    return WeeklySummaryResponse(data=summarize_week(body.summaries, body.day))


@app.get("/api/health")
def health():
    return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.exceptions import GroupingError
from data.config import get_config
from data.models import GroupingRequest
from services.grouping_service import GroupingService
from logger_config import get_logger

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.post("/bus-groups")
def create_bus_groups(request: GroupingRequest):
    logger = get_logger(get_config()["log_dir"])
    logger.info(f"Grouping request: {len(request.points)} points, "
                f"max_size={request.max_size}, min_size={request.min_size}")

    coords = [(p.x, p.y) for p in request.points]
    visitor_ids = [p.visitor_id for p in request.points]
    if not any(visitor_ids):
        visitor_ids = None

    try:
        result = GroupingService(logger=logger).run_grouping(
            coords,
            max_size=request.max_size,
            min_size=request.min_size,
            linkage_method=request.linkage_method,
            visitor_ids=visitor_ids,
        )
    except GroupingError as e:
        error_response = {
            "status": "false",
            "error": type(e).__name__,
            "details": str(e),
            "data": [],
        }
        logger.info(f"Sending error response: {error_response}")
        return error_response

    logger.info(f"Sending response: status={result['status']}, groups={result['group_count']}")
    return result


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=5000)

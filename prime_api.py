import time
from datetime import datetime
from flask import Blueprint, request, jsonify
from redis import Redis
from rq import Queue
from rq.job import Job
from rq.exceptions import NoSuchJobError

from mrprime import config
from mrprime.log import log

prime_bp = Blueprint("prime_bp", __name__)

# Redis / RQ
redis_conn = Redis.from_url(config.REDIS_URL)
prime_q = Queue("primes", connection=redis_conn, default_timeout=config.JOB_TIMEOUT)

# ------------------ helpers ------------------
def _age_secs(dt: datetime | None) -> float | None:
    if not dt:
        return None
    return max(0.0, time.time() - dt.timestamp())

def _job_dict(job: Job) -> dict:
    d = {
        "job_id": job.id,
        "status": job.get_status(),
        "meta": job.meta or {},
        "enqueued_at": job.enqueued_at.isoformat() if job.enqueued_at else None,
        "age_sec": _age_secs(job.enqueued_at),
    }
    if job.is_finished:
        d["result"] = job.return_value() if hasattr(job, "return_value") else job.result
    if job.is_failed:
        d["exc_info"] = (job.exc_info or "")[-1024:]
    return d

# ------------------ API ------------------
@prime_bp.get("/api/queue")
def queue_info():
    try:
        redis_conn.ping()
    except Exception as e:
        return jsonify({"ok": False, "msg": f"redis error: {e.__class__.__name__}"}), 503
    return jsonify({"ok": True, "queue": prime_q.name, "size": prime_q.count})

def _int_or_none(data: dict, key: str) -> int | None:
    v = data.get(key)
    if v in (None, ""):
        return None
    # str() first so floats and booleans are rejected, not truncated
    return int(str(v).strip())

@prime_bp.post("/api/prime/submit")
def prime_submit():
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "expected a JSON object"}), 400
    try:
        bits = _int_or_none(data, "bits") or 0
        rounds = _int_or_none(data, "rounds")
    except ValueError:
        return jsonify({"error": "bits and rounds must be integers"}), 400
    if bits < 1 or bits > config.MAX_JOB_BITS:
        return jsonify({"error": f"bits must be in 1..{config.MAX_JOB_BITS}"}), 400
    if rounds is not None and rounds < 1:
        return jsonify({"error": "rounds must be >= 1"}), 400

    try:
        job = prime_q.enqueue("prime_worker.find_prime_job", bits, rounds,
                              meta={"bits": bits, "rounds": rounds, "submitted": time.time()})
    except Exception as e:
        return jsonify({"error": f"queue unavailable: {e.__class__.__name__}"}), 503
    return jsonify({"job_id": job.id, "status": job.get_status(), "bits": bits}), 202

@prime_bp.get("/api/job/<job_id>")
def job_status(job_id):
    try:
        job = Job.fetch(job_id, connection=redis_conn)
    except NoSuchJobError:
        return jsonify({"error": "unknown job"}), 404
    return jsonify(_job_dict(job))

@prime_bp.post("/api/job/<job_id>/abort")
def job_abort(job_id):
    try:
        job = Job.fetch(job_id, connection=redis_conn)
    except NoSuchJobError:
        return jsonify({"error": "unknown job"}), 404
    try:
        if job.get_status() == "started":
            try:
                from rq.command import send_stop_job_command
                send_stop_job_command(redis_conn, job_id)
            except Exception as e:
                log(f"WARN stop_job_failed job_id={job_id} err={e!r}")
        job.cancel()
    except Exception as e:
        return jsonify({"error": f"cancel failed: {e.__class__.__name__}"}), 400
    return jsonify({"ok": True, "job_id": job_id, "status": job.get_status()})

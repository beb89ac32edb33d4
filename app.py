import time
from flask import Flask, request, jsonify, render_template_string
from werkzeug.exceptions import BadRequest

from mrprime import config, find_prime, is_probable_prime, pow_mod
from prime_api import prime_bp

app = Flask(__name__)
app.register_blueprint(prime_bp)

PAGE = """<!doctype html><html><head>
<meta charset="utf-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>mrprime</title>
<style>
body{font-family:system-ui,-apple-system,Segoe UI,Roboto,Ubuntu,Helvetica,Arial,sans-serif;margin:0;background:#fafafa;color:#111}
.wrap{max-width:860px;margin:40px auto;padding:0 16px}
.card{background:#fff;border:1px solid #eee;border-radius:12px;padding:16px;margin:18px 0}
input,button{font-size:14px;padding:10px;border-radius:8px;border:1px solid #d0d0d0}
input{width:100%;box-sizing:border-box}button{background:#111;color:#fff;cursor:pointer}
.mono{font-family:ui-monospace,Menlo,Consolas,monospace}
pre{white-space:pre-wrap;word-break:break-all;background:#f6f6f6;border:1px solid #eee;border-radius:8px;padding:10px}
</style></head><body><div class="wrap">
<h1>mrprime</h1>
<div class="card">
  <h3>Is it prime?</h3>
  <input id="t_n" class="mono" placeholder="enter integer"/>
  <div style="margin-top:8px"><button id="t_go">Test</button></div>
  <pre id="t_out">–</pre>
</div>
<div class="card">
  <h3>Random prime (up to {{MAX_BITS}} bits)</h3>
  <input id="r_bits" value="256"/>
  <div style="margin-top:8px"><button id="r_go">Find</button></div>
  <pre id="r_out">–</pre>
</div>
</div>
<script>
async function post(url,p){const r=await fetch(url,{method:'POST',headers:{'Content-Type':'application/json'},body:JSON.stringify(p)});return await r.json();}
document.querySelector('#t_go').onclick=async()=>{const n=(document.querySelector('#t_n').value||'').trim();const out=document.querySelector('#t_out');out.textContent='Testing…';try{out.textContent=JSON.stringify(await post('/api/is_prime',{n}),null,2);}catch(e){out.textContent='Error: '+e;}};
document.querySelector('#r_go').onclick=async()=>{const bits=parseInt(document.querySelector('#r_bits').value||'0',10);const out=document.querySelector('#r_out');out.textContent='Searching…';try{out.textContent=JSON.stringify(await post('/api/random_prime',{bits}),null,2);}catch(e){out.textContent='Error: '+e;}};
</script></body></html>"""

def _payload() -> dict:
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        raise BadRequest("expected a JSON object")
    return data

def _int_field(data: dict, key: str, default=None) -> int:
    v = data.get(key)
    if v in (None, ""):
        if default is None:
            raise BadRequest(f"missing {key}")
        return default
    try:
        return int(str(v).strip())
    except ValueError:
        raise BadRequest(f"{key} must be an integer")

@app.get("/")
def home():
    return render_template_string(PAGE.replace("{{MAX_BITS}}", str(config.MAX_SYNC_BITS)))

@app.get("/api/health")
def api_health():
    return jsonify(ok=True, time=int(time.time()))

@app.post("/api/is_prime")
def api_is_prime():
    data = _payload()
    n = _int_field(data, "n")
    rounds = _int_field(data, "rounds", config.DEFAULT_ROUNDS)
    if rounds < 1:
        raise BadRequest("rounds must be >= 1")
    return jsonify(n=str(n), bits=abs(n).bit_length(), rounds=rounds,
                   probable_prime=is_probable_prime(n, rounds))

@app.post("/api/powmod")
def api_powmod():
    data = _payload()
    base = _int_field(data, "base")
    exponent = _int_field(data, "exponent")
    modulus = _int_field(data, "modulus")
    try:
        r = pow_mod(base, exponent, modulus)
    except ValueError as e:
        raise BadRequest(str(e))
    return jsonify(result=str(r))

@app.post("/api/random_prime")
def api_random_prime():
    data = _payload()
    bits = _int_field(data, "bits")
    if bits < 1:
        raise BadRequest("bits must be >= 1")
    if bits > config.MAX_SYNC_BITS:
        raise BadRequest(f"bits > {config.MAX_SYNC_BITS}; submit to /api/prime/submit instead")
    rounds = _int_field(data, "rounds", 1 + bits // 2)
    if rounds < 1:
        raise BadRequest("rounds must be >= 1")
    t0 = time.perf_counter()
    p, iters = find_prime(bits, rounds, return_iters=True)
    ms = round((time.perf_counter() - t0) * 1000, 3)
    return jsonify(prime=str(p), bits=bits, rounds=rounds, iters=iters, ms=ms)

if __name__ == "__main__":
    app.run("127.0.0.1", 8080, debug=True)

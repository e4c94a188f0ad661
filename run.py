"""
EcoSense AI - Environmental Intelligence Demo
Main Application Entry Point
"""

from flask import jsonify

from ecosense import create_app

print("\n" + "="*80)
print("🌍 ECOSENSE AI - INITIALIZING")
print("="*80)

app = create_app()

print("="*80)
print("✅ ECOSENSE AI INITIALIZED SUCCESSFULLY")
print("="*80 + "\n")


@app.route('/debug/routes')
def debug_routes():
    """Show all registered routes"""
    routes = []
    for rule in app.url_map.iter_rules():
        routes.append({
            'endpoint': rule.endpoint,
            'methods': sorted(rule.methods),
            'path': str(rule)
        })

    return jsonify({
        'success': True,
        'total_routes': len(routes),
        'all_routes': sorted(routes, key=lambda x: x['path'])
    })


if __name__ == '__main__':
    print("\n" + "="*80)
    print("🚀 STARTING ECOSENSE AI SERVER")
    print("="*80)
    print("📍 Local:   http://127.0.0.1:5000")
    print("📍 Network: http://localhost:5000")
    print("\n💡 Useful Routes:")
    print("   - http://localhost:5000/health")
    print("   - http://localhost:5000/features/")
    print("   - http://localhost:5000/debug/routes")
    print("="*80 + "\n")

    app.run(
        debug=True,
        host='0.0.0.0',
        port=5000,
        use_reloader=True
    )

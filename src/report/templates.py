# src/report/templates.py
# Jinja2 sources for the HTML report and the notification email.
# Values marked with data-field="..." are the literal calculation results.

REPORT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Workspace Savings Analysis - {{ contact.company }}</title>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #333; background: #f8fafc; }
        .container { max-width: 800px; margin: 0 auto; background: white; }
        .header { background: #000053; color: white; padding: 40px 30px; text-align: center; position: relative; }
        .header h1 { font-size: 28px; margin-bottom: 10px; font-weight: 600; }
        .header p { font-size: 16px; opacity: 0.9; }
        .logo { position: absolute; top: 20px; right: 30px; width: 60px; height: 60px; }
        .logo img { width: 100%; height: 100%; object-fit: contain; }
        .executive-summary { padding: 30px; background: #f1f5f9; border-left: 4px solid #000053; }
        .metrics-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(180px, 1fr)); gap: 20px; margin: 20px 0; }
        .metric-card { background: white; padding: 20px; border-radius: 8px; text-align: center; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
        .metric-value { font-size: 24px; font-weight: bold; margin-bottom: 5px; }
        .metric-label { font-size: 14px; color: #64748b; }
        .savings { color: #16a34a; }
        .waste { color: #dc2626; }
        .section { padding: 30px; border-bottom: 1px solid #e2e8f0; }
        .section h2 { font-size: 22px; margin-bottom: 20px; color: #1e293b; border-bottom: 2px solid #000053; padding-bottom: 10px; }
        .calculation-step { background: #f8fafc; padding: 15px; margin: 10px 0; border-radius: 6px; border-left: 3px solid #000053; }
        .formula { font-family: 'Courier New', monospace; background: #e2e8f0; padding: 8px; border-radius: 4px; margin: 5px 0; }
        .client-info { background: #f1f5f9; padding: 20px; border-radius: 8px; margin: 20px 0; }
        .two-col { display: grid; grid-template-columns: 1fr 1fr; gap: 20px; }
        .benefits-list { list-style: none; padding: 0; }
        .benefits-list li { padding: 8px 0 8px 25px; position: relative; }
        .benefits-list li:before { content: "\\2713"; position: absolute; left: 0; color: #16a34a; font-weight: bold; }
        .footer { background: #1e293b; color: white; padding: 20px 30px; text-align: center; font-size: 14px; }
        @media print { body { background: white; } }
    </style>
</head>
<body>
<div class="container">
    <div class="header">
        <h1>Workspace Savings Analysis</h1>
        <p>Executive Summary</p>
        {% if logo_url %}<div class="logo"><img src="{{ logo_url }}" alt="{{ brand }} Logo"></div>{% endif %}
    </div>

    <div class="executive-summary">
        <p>By implementing {{ brand }}, you can fully transition to a flexible workspace strategy, and in time reduce real estate costs by <strong>{{ result.cost_cut_percentage|pct }}</strong>, optimising a <strong>{{ result.annual_cost|eur }}</strong> annual expense with minimal disruption.</p>
        <div class="metrics-grid">
            <div class="metric-card">
                <div class="metric-value waste" data-field="annual_waste">{{ result.annual_waste|eur }}</div>
                <div class="metric-label">Annual Waste</div>
            </div>
            <div class="metric-card">
                <div class="metric-value savings" data-field="recoverable_savings">{{ result.recoverable_savings|eur }}</div>
                <div class="metric-label">Potential Savings</div>
            </div>
            <div class="metric-card">
                <div class="metric-value">{{ result.utilization|num }}% &rarr; {{ target_utilization|num }}%</div>
                <div class="metric-label">{{ "Workstation" if by_workstation else "Space" }} Efficiency</div>
            </div>
        </div>
    </div>

    <div class="client-info">
        <h3>Personalized Report for {{ contact.company }}</h3>
        <p><strong>Prepared for:</strong> {{ contact.name }}, {{ contact.company }}</p>
        <p><strong>Date:</strong> {{ today }} | <strong>Location:</strong> {{ contact.location }} | <strong>Report ID:</strong> <span data-field="report_id">{{ report_id }}</span></p>
        <p><strong>Calculation Method:</strong> {{ method_label }}</p>
    </div>

    <div class="section">
        <h2>Your Current Situation</h2>
        <div class="two-col">
            <div>
                <h4>{{ "Workstation Portfolio" if by_workstation else "Office Portfolio" }}</h4>
                <ul style="list-style: none; padding: 10px 0;">
                    <li><strong>Team Size:</strong> {{ form.number_of_employees or "Not specified" }}</li>
                    {% if by_workstation %}
                    <li><strong>Current Workstations:</strong> {{ result.workstations|num }}</li>
                    <li><strong>Workstation Cost:</strong> {{ result.cost_per_workstation|eur }} per workstation annually</li>
                    <li><strong>Annual Cost:</strong> <span data-field="annual_cost">{{ result.annual_cost|eur }}</span></li>
                    <li><strong>Workstation Utilization:</strong> {{ result.utilization|num }}%</li>
                    {% else %}
                    <li><strong>Office Space:</strong> {{ result.office_size_m2|num }} m²</li>
                    <li><strong>Monthly Cost:</strong> {{ result.monthly_cost|eur }}</li>
                    <li><strong>Annual Cost:</strong> <span data-field="annual_cost">{{ result.annual_cost|eur }}</span></li>
                    <li><strong>Space Utilization:</strong> {{ result.utilization|num }}%</li>
                    {% endif %}
                </ul>
            </div>
            <div>
                <h4>Context</h4>
                <p>Modern workplace environments foster collaboration, drive productivity, and strengthen talent attraction. A scalable infrastructure that maximises the dynamic use of office space lets organisations adapt quickly while reducing fixed overhead costs.</p>
            </div>
        </div>
    </div>

    <div class="section">
        <h2>Calculation breakdown</h2>
        <div class="calculation-step">
            <h4>Calculation Method: {{ method_label }}</h4>
            {% if by_workstation %}
            <p>This analysis calculates savings based on workstation costs and utilization rates, using {{ "your specified" if custom_workstation_cost else "an industry-standard" }} annual cost of {{ result.cost_per_workstation|eur }} per workstation.</p>
            {% else %}
            <p>This analysis calculates savings based on office space costs and occupancy rates, using your monthly office expenditures and space utilization data.</p>
            {% endif %}
        </div>

        <div class="calculation-step">
            <h4>Step 1: Annual Cost Calculation</h4>
            {% if by_workstation %}
            <div class="formula">Annual Cost = Number of Workstations × {{ result.cost_per_workstation|eur }}</div>
            <div class="formula">{{ result.workstations|num }} workstations × {{ result.cost_per_workstation|eur }} = {{ result.annual_cost|eur }}</div>
            {% else %}
            <div class="formula">Annual Cost = Monthly Cost × 12</div>
            <div class="formula">{{ result.monthly_cost|eur }} × 12 = {{ result.annual_cost|eur }}</div>
            {% endif %}
        </div>

        <div class="calculation-step">
            <h4>Step 2: Waste Factor Analysis</h4>
            <div class="formula">Waste Factor = 100% - {{ "Workstation" if by_workstation else "Space" }} Utilization%</div>
            <div class="formula">100% - {{ result.utilization|num }}% = {{ (result.waste_factor * 100)|num }}%</div>
            <p>Percentage of {{ "workstations" if by_workstation else "office space" }} that remains unused</p>
        </div>

        <div class="calculation-step">
            <h4>Step 3: Annual Waste Calculation</h4>
            <div class="formula">Annual Waste = Annual Cost × Waste Factor</div>
            <div class="formula">{{ result.annual_cost|eur }} × {{ (result.waste_factor * 100)|num }}% = {{ result.raw_annual_waste|eur }}</div>
        </div>

        {% if adjusted %}
        <div class="calculation-step">
            <h4>Step 4: Working Arrangement Adjustment</h4>
            <div class="formula">Adjusted Waste = Annual Waste × Working Arrangement Multiplier</div>
            <div class="formula">{{ result.raw_annual_waste|eur }} × {{ "%.2f"|format(result.work_model_multiplier) }} = {{ result.annual_waste|eur }}</div>
            <p><strong>Working Arrangement Multiplier: {{ "%.2f"|format(result.work_model_multiplier) }}</strong> - reflects the {{ reduction_pct }}% reduction in waste due to {{ work_model }} working patterns</p>
        </div>
        {% endif %}

        <div class="calculation-step">
            <h4>Step {{ step_recover }}: Recoverable Savings</h4>
            <div class="formula">Recoverable Savings = {{ "Adjusted Waste" if adjusted else "Annual Waste" }} × {{ recovery_pct }}%</div>
            <div class="formula">{{ result.annual_waste|eur }} × {{ recovery_pct }}% = {{ result.recoverable_savings|eur }}</div>
            <p>Monthly waste: <span data-field="monthly_waste">{{ result.monthly_waste|eur }}</span></p>
        </div>

        <div class="calculation-step">
            <h4>Step {{ step_recover + 1 }}: Savings Percentage</h4>
            <div class="formula">Savings Percent = Annual Savings ÷ Annual Cost × 100</div>
            <div class="formula">{{ result.recoverable_savings|eur }} ÷ {{ result.annual_cost|eur }} × 100 = <span data-field="cost_cut_percentage">{{ result.cost_cut_percentage|pct }}</span></div>
        </div>

        <div class="calculation-step">
            <h4>Step {{ step_recover + 2 }}: Financial Impact Summary</h4>
            <div class="two-col">
                <div>
                    <h4>Cost Comparison</h4>
                    <ul style="list-style: none;">
                        <li><strong>Current Annual:</strong> {{ result.annual_cost|eur }}</li>
                        <li><strong>With Flex Solution:</strong> <span data-field="optimized_cost">{{ result.optimized_cost|eur }}</span></li>
                        <li><strong>Annual Savings:</strong> <span class="savings">{{ result.recoverable_savings|eur }}</span></li>
                        <li><strong>Savings Percentage:</strong> <span class="savings">{{ result.cost_cut_percentage|pct }}</span></li>
                    </ul>
                </div>
                <div>
                    <h4>Key Benefits</h4>
                    <ul class="benefits-list">
                        <li>{{ result.cost_cut_percentage|pct }} immediate cost reduction</li>
                        <li>Enhanced workforce flexibility</li>
                        <li>Reduced real estate fixed costs</li>
                        <li>Improved employee productivity and satisfaction</li>
                        <li>Scalable workplace infrastructure</li>
                    </ul>
                </div>
            </div>
        </div>
    </div>

    <div class="section">
        <h2>Calculation Assumptions &amp; Methodology</h2>
        {% if by_workstation %}
        <p>This analysis uses a <strong>workstation-centric approach</strong> with {{ "your specified" if custom_workstation_cost else "an industry-standard" }} annual cost of <strong>{{ result.cost_per_workstation|eur }} per workstation</strong>, covering physical infrastructure, technology and equipment, facilities overhead and a share of common areas. The workstation count defaults to your employee count (1:1) unless overridden.</p>
        {% else %}
        <p>This analysis uses a <strong>space-centric approach</strong> based on your monthly office expenditures and occupancy. Where no monthly cost was given it is derived at {{ cost_per_m2|eur }} per m² per year.</p>
        {% endif %}
        <div class="calculation-step">
            <h4>{{ recovery_pct }}% Recovery Rate Rationale</h4>
            <p>The {{ recovery_pct }}% recovery rate is the realistic share of identified waste that can be recaptured through flexible workspace optimisation. The remaining {{ 100 - recovery_pct }}% accounts for lease obligations, utility contracts, transition costs and phased rollout.</p>
        </div>
        <div class="calculation-step">
            <h4>Implementation Realities</h4>
            <ul style="margin-left: 20px; line-height: 1.8;">
                <li><strong>Gradual Rollout:</strong> most organisations move to flexible workspace in phases</li>
                <li><strong>Employee Adaptation:</strong> teams need time to adjust to new working patterns</li>
                <li><strong>Regulatory Requirements:</strong> some industries require a minimum physical presence</li>
                <li><strong>Market Conditions:</strong> availability and pricing of flexible workspace in {{ contact.location }}</li>
            </ul>
        </div>
    </div>

    <div class="section">
        <h2>Next Steps</h2>
        <p><strong>Option 1: Book a Strategy Call</strong> to review this analysis with a workplace specialist.</p>
        <p><strong>Option 2: Get Office Proposals</strong> with curated spaces in {{ contact.location }} and team-size based pricing.</p>
    </div>

    <div class="footer">
        <p>This analysis is based on current market data and industry benchmarks for {{ contact.location }}. Results may vary based on implementation details and market conditions.</p>
        <p>Report generated by Flexible Workspace ROI Calculator | Report ID: {{ report_id }} | Generated: {{ today }}</p>
    </div>
</div>
</body>
</html>
"""

EMAIL_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Flexible Workspace ROI Analysis</title>
    <style>
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px; }
        .header { background: #1e40af; color: white; padding: 20px; text-align: center; border-radius: 8px 8px 0 0; }
        .content { background: #f8fafc; padding: 30px; border-radius: 0 0 8px 8px; }
        .metric { background: white; padding: 20px; margin: 15px 0; border-radius: 8px; border-left: 4px solid #10b981; }
        .metric-value { font-size: 24px; font-weight: bold; color: #1e40af; }
        .metric-label { color: #6b7280; font-size: 14px; }
        .waste-metric { border-left-color: #ef4444; }
        .waste-metric .metric-value { color: #ef4444; }
        .notice { background: #fef3c7; padding: 15px; border-radius: 8px; margin: 20px 0; border-left: 4px solid #f59e0b; }
    </style>
</head>
<body>
    <div class="header">
        <h1>Flexible Workspace ROI Analysis</h1>
        <p>Personalized Report for {{ contact.name }}, {{ contact.company }}</p>
        <p>Date: {{ today }} | Location: {{ contact.location }}</p>
    </div>
    <div class="content">
        <div class="notice">
            <h3>Complete Report Attached</h3>
            <p>Your ROI analysis is attached as an HTML document with all data and calculations.</p>
        </div>
        <h3>{{ "Workstation Analysis" if by_workstation else "Office Space Analysis" }}</h3>
        {% if by_workstation %}
        <p><strong>{{ result.workstations|num }}</strong> workstations at <strong>{{ result.utilization|num }}%</strong> utilization</p>
        {% else %}
        <p><strong>{{ result.office_size_m2|num }} m²</strong> at <strong>{{ result.utilization|num }}%</strong> occupancy</p>
        {% endif %}
        <h2>Executive Summary</h2>
        <p>By transitioning to a flexible workspace strategy, <strong>{{ contact.company }}</strong> can reduce real estate costs by <strong>{{ result.cost_cut_percentage|pct }}</strong>, optimizing a <strong>{{ result.annual_cost|eur }}</strong> annual expense.</p>
        <div class="metric waste-metric">
            <div class="metric-value">{{ result.annual_waste|eur }}</div>
            <div class="metric-label">Annual waste on unused space</div>
        </div>
        <div class="metric">
            <div class="metric-value">{{ result.monthly_waste|eur }}</div>
            <div class="metric-label">Monthly waste</div>
        </div>
        <div class="metric">
            <div class="metric-value">{{ result.recoverable_savings|eur }}</div>
            <div class="metric-label">Potential savings</div>
        </div>
        <div class="metric">
            <div class="metric-value">{{ result.cost_cut_percentage|pct }}</div>
            <div class="metric-label">Potential cost reduction</div>
        </div>
        <p style="font-size: 12px; color: #6b7280; margin-top: 30px;">Report ID: {{ report_id }} | Generated: {{ generated_at }}</p>
    </div>
</body>
</html>
"""

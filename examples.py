#!/usr/bin/env python3
"""
Examples of using the Sankey layout engine.

Run this file to lay out a few example diagrams, print their column
summaries and save each layout as JSON.
"""

from sankeylayout import LayoutExporter, LayoutInspector, SankeyLayout, parse_flows


def run_example(title, input_text, filename, width=600, height=400):
    print(title)

    data = parse_flows(input_text).to_data()
    layout = SankeyLayout(width=width, height=height)
    result = layout.layout(data["nodes"], data["links"])

    print(LayoutInspector(result).column_summary())
    LayoutExporter().save_json(result, filename)
    print(f"  Saved: {filename}\n")


def example_budget():
    """Monthly budget split"""
    run_example(
        "Example 1: Household Budget",
        """
        Salary -> Budget : 3000
        Side Job -> Budget : 500
        Budget -> Rent : 1200
        Budget -> Food : 600
        Budget -> Transport : 300
        Budget -> Savings : 1400
        """,
        "example_budget.json",
    )


def example_energy():
    """Energy conversion with losses"""
    run_example(
        "Example 2: Energy Flow",
        """
        Coal -> Electricity : 30
        Gas -> Electricity : 20
        Gas -> Heat : 15
        Solar -> Electricity : 10
        Solar -> Losses : 2
        Electricity -> Homes : 25
        Electricity -> Industry : 20
        Electricity -> Losses : 15
        Heat -> Homes : 10
        Heat -> Losses : 5
        """,
        "example_energy.json",
    )


def example_funnel():
    """Web signup funnel"""
    run_example(
        "Example 3: Signup Funnel",
        """
        Visits -> Signup Page : 800
        Visits -> Bounced : 1200
        Signup Page -> Registered : 300
        Signup Page -> Abandoned : 500
        Registered -> Activated : 180
        Registered -> Dormant : 120
        """,
        "example_funnel.json",
        width=800,
    )


if __name__ == "__main__":
    example_budget()
    example_energy()
    example_funnel()

"""
Main NiceGUI application for the expertise graph editor.

Left: the radial graph canvas rendered with ui.echart. Categories are
dragged around the center node; the chart is sized to canvas * zoom so
pointer offsets divide cleanly back into canvas units.
Right: the inspector panel. With a node selected it edits that node
(label, angle, radius, color, tools); otherwise it edits the section title.
"""

import logging
import sys

from dotenv import load_dotenv
from nicegui import run, ui

load_dotenv()

from orbit.constants import CANVAS_HEIGHT, CANVAS_WIDTH, INK_COLOR, PALETTE, PAPER_COLOR
from orbit.edit.handlers import POINTER_EVENT_KEYS, make_position_field_handler, setup_drag_handlers
from orbit.editor import EditorSession
from orbit.storage import PersistenceError, create_gateway

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)


@ui.page('/')
def main_page():
    try:
        gateway = create_gateway()
    except ValueError as e:
        logger.error(f"Storage misconfigured: {e}")
        ui.notify(f'Storage misconfigured: {e}', type='negative')
        gateway = None

    session = EditorSession(gateway)
    state = {
        'chart': None,
        'zoom_label': None,
    }

    # --- Rendering ---

    def chart_size_style() -> str:
        return (f'width: {CANVAS_WIDTH * session.zoom}px; '
                f'height: {CANVAS_HEIGHT * session.zoom}px; touch-action: none;')

    def refresh_chart_ui():
        chart = state['chart']
        if chart is None:
            return
        chart.options.clear()
        chart.options.update(session.chart_options())
        chart.update()

    def apply_zoom():
        state['chart'].style(replace=chart_size_style())
        state['zoom_label'].text = f'{round(session.zoom * 100)}%'
        # The element was resized; let ECharts re-measure it
        state['chart'].run_chart_method('resize')

    # --- Inspector ---

    @ui.refreshable
    def inspector_panel():
        category = session.inspector.get_selected()
        if category is None:
            render_global_settings()
        else:
            render_node_editor(category)

    def render_global_settings():
        with ui.column().classes('w-full items-center gap-2 pt-6'):
            ui.icon('ads_click', size='xl').classes('opacity-20')
            ui.label('Select a Node').classes('text-xl font-bold')
            ui.label('Click on any circle in the graph to edit its position, color, '
                     'and contained tools. Drag nodes to rearrange your universe.') \
                .classes('text-sm text-center opacity-70 px-6')
        ui.separator()
        ui.input('Section Title', value=session.model.title,
                 on_change=lambda e: session.inspector.set_title(e.value)).classes('w-full')
        ui.input('Subtitle', value=session.model.subtitle,
                 on_change=lambda e: session.inspector.set_subtitle(e.value)).classes('w-full')

    def render_node_editor(category):
        inspector = session.inspector

        def on_label(e):
            inspector.set_label(e.value)
            refresh_chart_ui()

        on_angle = make_position_field_handler(inspector, 'angle', refresh_chart_ui)
        on_radius = make_position_field_handler(inspector, 'radius', refresh_chart_ui)

        def on_color(color):
            inspector.set_color(color)
            refresh_chart_ui()
            inspector_panel.refresh()

        def close():
            inspector.select(None)
            refresh_chart_ui()

        with ui.row().classes('w-full items-center justify-between'):
            with ui.row().classes('items-center gap-2'):
                ui.element('span').classes('w-3 h-3 rounded-full').style(f'background: {category.color}')
                ui.label(category.label).classes('font-bold')
            ui.button('Close', icon='close', on_click=close).props('flat dense size=sm')

        ui.input('Label', value=category.label, on_change=on_label).classes('w-full')
        with ui.row().classes('w-full no-wrap gap-4'):
            ui.number('Angle', value=category.angle, on_change=on_angle).classes('flex-1')
            ui.number('Radius', value=category.radius, min=0, on_change=on_radius).classes('flex-1')

        ui.label('Node Color').classes('text-xs font-bold uppercase opacity-60')
        with ui.row().classes('gap-2'):
            for color in PALETTE:
                border = INK_COLOR if category.color == color else 'transparent'
                ui.button(on_click=lambda c=color: on_color(c)).props('round dense unelevated') \
                    .style(f'background-color: {color} !important; border: 2px solid {border}; '
                           f'width: 32px; height: 32px;')

        ui.separator()
        render_tools(category)

        ui.button('Delete Node', icon='delete', on_click=confirm_delete) \
            .props('flat color=negative').classes('w-full mt-4')

    def render_tools(category):
        inspector = session.inspector

        def add_tool():
            inspector.add_tool()
            inspector_panel.refresh()
            refresh_chart_ui()

        def remove_tool(tool_id):
            inspector.remove_tool(tool_id)
            inspector_panel.refresh()
            refresh_chart_ui()

        with ui.row().classes('w-full items-center justify-between'):
            ui.label('Tools / Skills').classes('text-sm font-bold uppercase')
            ui.button('+ Add', on_click=add_tool).props('dense unelevated color=pink-3 size=sm')

        if not category.tools:
            ui.label('No tools added yet.').classes('text-xs italic opacity-60 w-full text-center')
        for tool in category.tools:
            with ui.card().classes('w-full p-2 gap-1'):
                with ui.row().classes('w-full no-wrap items-center'):
                    ui.input(placeholder='Tool Name', value=tool.name,
                             on_change=lambda e, tid=tool.id: inspector.update_tool(tid, 'name', e.value)) \
                        .props('dense').classes('flex-1')
                    ui.button(icon='delete', on_click=lambda tid=tool.id: remove_tool(tid)) \
                        .props('flat dense color=negative size=sm')
                ui.input(placeholder='Icon URL...', value=tool.icon_url,
                         on_change=lambda e, tid=tool.id: inspector.update_tool(tid, 'icon_url', e.value)) \
                    .props('dense').classes('w-full text-xs')

    def confirm_delete():
        with ui.dialog() as dialog, ui.card():
            ui.label('Delete entire category node?')

            def do_delete():
                session.inspector.delete_selected()
                dialog.close()
                refresh_chart_ui()

            with ui.row():
                ui.button('Cancel', on_click=dialog.close).props('flat')
                ui.button('Delete', on_click=do_delete).props('color=negative')
        dialog.open()

    session.inspector.set_on_selection_change(lambda _id: inspector_panel.refresh())

    # --- Toolbar actions ---

    def add_category():
        session.add_category()
        refresh_chart_ui()

    async def save():
        save_button.props('loading')
        try:
            result = await run.io_bound(session.save)
        except Exception as e:
            logger.exception("Save failed")
            result = {'success': False, 'message': str(e)}
        finally:
            save_button.props(remove='loading')
        if result.get('success'):
            ui.notify(result.get('message', 'Saved'), type='positive', position='bottom')
        else:
            ui.notify(result.get('message', 'Save failed'), type='negative', position='bottom')

    def on_zoom(action):
        action()
        apply_zoom()

    # --- Layout Construction ---

    with ui.row().classes('w-full h-screen no-wrap gap-0').style(f'background: {PAPER_COLOR}'):
        with ui.scroll_area().classes('flex-1 h-full relative'):
            with ui.card().classes('fixed top-4 left-4 z-20 p-2 gap-1'):
                ui.button(icon='zoom_in', on_click=lambda: on_zoom(session.zoom_in)).props('flat dense')
                ui.button(icon='zoom_out', on_click=lambda: on_zoom(session.zoom_out)).props('flat dense')
                ui.button(icon='fit_screen', on_click=lambda: on_zoom(session.reset_zoom)).props('flat dense')
                state['zoom_label'] = ui.label('100%').classes('text-xs text-center w-full')

            state['chart'] = ui.echart(session.chart_options())
            state['chart'].style(chart_size_style())

        with ui.column().classes('w-[400px] h-full bg-white shadow-2xl p-6 gap-4 overflow-y-auto'):
            with ui.row().classes('w-full items-center justify-between'):
                with ui.column().classes('gap-0'):
                    ui.label('Data Inspector').classes('text-lg font-bold')
                    ui.label('').bind_text_from(
                        session.inspector, 'selected_id',
                        backward=lambda sid: 'Editing Node' if sid else 'Global Settings',
                    ).classes('text-[10px] uppercase font-bold opacity-60')
                with ui.row().classes('gap-2'):
                    ui.button(icon='add', on_click=add_category).props('unelevated dense') \
                        .bind_visibility_from(session.inspector, 'is_global_mode') \
                        .tooltip('Add New Node')
                    save_button = ui.button(icon='save', on_click=save).props('outline dense')
            inspector_panel()

    drag_handlers = setup_drag_handlers(
        controller=session.controller,
        refresh_chart=refresh_chart_ui,
        refresh_inspector=inspector_panel.refresh,
    )
    chart = state['chart']
    chart.on('pointerdown', drag_handlers['handle_pointer_down'], POINTER_EVENT_KEYS)
    chart.on('pointermove', drag_handlers['handle_pointer_move'], POINTER_EVENT_KEYS)
    chart.on('pointerup', drag_handlers['handle_pointer_up'], POINTER_EVENT_KEYS)
    chart.on('pointercancel', drag_handlers['handle_pointer_up'], POINTER_EVENT_KEYS)
    chart.on('pointerleave', drag_handlers['handle_pointer_leave'], POINTER_EVENT_KEYS)

    async def load_graph():
        if gateway is None:
            return
        try:
            loaded = await run.io_bound(gateway.load)
        except PersistenceError as e:
            logger.error(f"Failed to load graph: {e}")
            ui.notify(f'Failed to load: {e}', type='negative')
            return
        session.apply_loaded(loaded)
        inspector_panel.refresh()
        refresh_chart_ui()

    # Load after the page is up: a stale render while the load runs is fine
    ui.timer(0.1, load_graph, once=True)


if __name__ in {"__main__", "__mp_main__"}:
    ui.run(
        title='Expertise Graph Editor',
        port=8082,
        reload=not getattr(sys, 'frozen', False),
    )
